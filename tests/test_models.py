from dataclasses import FrozenInstanceError, replace

import pytest
from pydantic import ValidationError

from fm_formatter.models import (
    GEAR_SLOTS,
    FMPIClass,
    FrontAndRearSettings,
    classify_pi,
    default_setup,
    setup_from_dict,
    setup_to_dict,
    upgrade_pairs,
)
from fm_formatter.units import ForceUnit, LengthUnit, PressureUnit, SpringRateUnit


@pytest.mark.parametrize("pi, expected", [
    (100, FMPIClass.E),
    (300, FMPIClass.E),
    (301, FMPIClass.D),
    (700, FMPIClass.A),
    (701, FMPIClass.S),
    (900, FMPIClass.R),
    (901, FMPIClass.P),
    (998, FMPIClass.P),
    (999, FMPIClass.X),
    (1200, FMPIClass.X),
])
def test_classify_pi(pi, expected):
    assert classify_pi(pi) == expected


def test_default_form():
    setup = default_setup()
    tune = setup.tune

    assert setup.stats.pi == 700
    assert setup.stats.classification == FMPIClass.A
    assert tune.gears.ratios == ("",) * GEAR_SLOTS
    assert tune.tires.units == PressureUnit.BAR
    assert tune.springs.units == SpringRateUnit.KGF
    assert tune.ride_height.units == LengthUnit.CM
    assert tune.roll_center_height_offset.units == LengthUnit.CM
    assert tune.aero.units == ForceUnit.KGF
    assert tune.steering_wheel.na is True
    assert setup.upgrades.engine.motor_and_battery == "N/A"
    assert setup.upgrades.platform_and_handling.ballast == "None"


def test_records_are_frozen():
    setup = default_setup()
    with pytest.raises(FrozenInstanceError):
        setup.make = "Mazda"
    with pytest.raises(FrozenInstanceError):
        setup.tune.tires.na = True
    with pytest.raises(TypeError):
        setup.tune.gears.ratios[0] = "3.50"


def test_unknown_version_falls_back_to_v2():
    assert default_setup("v9") == default_setup("v2")


def test_upgrade_pairs_keep_declared_order():
    pairs = upgrade_pairs(default_setup().upgrades.fuel_and_air)
    keys = [key for key, _ in pairs]
    assert keys[0] == "fuel_system"
    assert keys[-1] == "intercooler"
    assert ("restrictor_plate", "") in pairs


def test_setup_name_skips_blank_parts():
    setup = replace(default_setup(), make="Mazda", model="MX-5")
    assert setup.name == "Mazda MX-5"


def test_direct_construction_coerces_numbers():
    caster = FrontAndRearSettings(front=5.5)
    assert caster.front == "5.5"
    assert caster.rear == ""


def test_from_dict_reads_camel_case_and_coerces():
    setup = setup_from_dict({
        "year": 2024,
        "make": "Test",
        "model": "Car",
        "stats": {"pi": "850", "zeroToSixty": 3.2},
        "tune": {
            "tires": {"front": 1.9, "units": "psi"},
            "rideHeight": {"na": True},
            "gears": {"ratios": [3.5, "2.10", None]},
            "steeringWheel": {"na": False, "ffbScale": 90},
        },
        "upgrades": {"platformAndHandling": {"frontArb": "Race"}},
    })

    assert setup.year == "2024"
    assert setup.stats.pi == 850
    assert setup.stats.classification == FMPIClass.R
    assert setup.stats.zero_to_sixty == "3.2"
    assert setup.tune.tires.front == "1.9"
    assert setup.tune.tires.rear == ""
    assert setup.tune.tires.units == PressureUnit.PSI
    assert setup.tune.ride_height.na is True
    assert setup.tune.ride_height.units == LengthUnit.CM
    assert setup.tune.gears.ratios == ("3.5", "2.10", "")
    assert setup.tune.steering_wheel.ffb_scale == "90"
    assert setup.upgrades.platform_and_handling.front_arb == "Race"
    assert setup.upgrades.platform_and_handling.rear_arb == "Stock"


def test_from_dict_accepts_snake_case_keys():
    setup = setup_from_dict({"tune": {"ride_height": {"front": "10"}}})
    assert setup.tune.ride_height.front == "10"


def test_from_dict_keeps_explicit_classification():
    setup = setup_from_dict({"stats": {"pi": 850, "classification": "b"}})
    assert setup.stats.classification == FMPIClass.B


@pytest.mark.parametrize("classification", ["", None])
def test_from_dict_blank_classification_follows_pi(classification):
    setup = setup_from_dict({"stats": {"pi": 420, "classification": classification}})
    assert setup.stats.classification == FMPIClass.C


@pytest.mark.parametrize("flag, expected", [
    ("false", False),
    ("true", True),
    (0, False),
    (1, True),
])
def test_from_dict_parses_flag_strings(flag, expected):
    setup = setup_from_dict({"tune": {"tires": {"na": flag}}})
    assert setup.tune.tires.na is expected


@pytest.mark.parametrize("data", [
    {"stats": [1, 2]},
    {"tune": {"gears": {"ratios": 5}}},
    {"tune": {"gears": {"ratios": "3.5"}}},
    {"tune": {"tires": {"na": "sometimes"}}},
    {"tune": {"tires": {"front": ["1.9"]}}},
    {"stats": {"pi": "fast"}},
    {"stats": {"classification": "Z"}},
])
def test_from_dict_rejects_wrongly_shaped_input(data):
    with pytest.raises(ValidationError):
        setup_from_dict(data)


def test_from_dict_rejects_unknown_unit():
    with pytest.raises(ValidationError, match="Unknown unit"):
        setup_from_dict({"tune": {"springs": {"units": "N/cm"}}})


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


def test_to_dict_round_trip(tuned_setup):
    data = setup_to_dict(tuned_setup)

    assert data["tune"]["rideHeight"]["units"] == "cm"
    assert data["tune"]["gears"]["ratios"][:2] == ["3.50", "2.10"]
    assert data["stats"]["classification"] == "S"
    assert data["upgrades"]["platformAndHandling"]["frontArb"] == "Race"
    assert setup_from_dict(data) == tuned_setup
