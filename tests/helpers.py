from fm_formatter.models import GEAR_SLOTS, FMSetup, setup_from_dict

SHARE_LINK = "https://optn.club/formatter/forza/motorsport/v2?share=abc123"


def gear_ratios(*values: str) -> list[str]:
    """Final drive first, padded with blanks to the form's gear slots."""
    return [*values, *([""] * (GEAR_SLOTS - len(values)))]


TUNED = {
    "stats": {"pi": 800, "classification": "S", "hp": "500", "weight": "1400", "balance": "52"},
    "tune": {
        "tires": {"front": "1.9", "rear": "2.0"},
        "gears": {"ratios": gear_ratios("3.50", "2.10", "1.40", "1.10")},
        "alignment": {"camber": {"front": "-1.5", "rear": "-1.0"}, "caster": "5.5"},
        "arb": {"front": "25.0", "rear": "20.0"},
        "brake": {"bias": "52", "pressure": "100"},
    },
    "upgrades": {
        "platformAndHandling": {"frontArb": "Race"},
        "tires": {"compound": "Sport"},
    },
}


def build_setup(overrides: dict | None = None, year: str = "2024", make: str = "Test",
                model: str = "Car") -> FMSetup:
    """v2 기본 폼 + 차량 이름 + 폼 JSON 조각."""
    return setup_from_dict({"year": year, "make": make, "model": model, **(overrides or {})})
