import pytest

from fm_formatter.units import (
    UNIT_TYPES,
    ForceUnit,
    GlobalUnit,
    GlobalUnits,
    LengthUnit,
    PowerUnit,
    SpeedUnit,
    SpringRateUnit,
    TorqueUnit,
    UnknownUnitError,
    WeightUnit,
    opposite,
    parse_global_unit,
    parse_unit,
    units_for_global_system,
)

ALL_UNITS = [member for unit_type in UNIT_TYPES for member in unit_type]


@pytest.mark.parametrize("unit", ALL_UNITS, ids=str)
def test_opposite_is_an_involution(unit):
    paired = opposite(unit)
    assert paired != unit
    assert type(paired) is type(unit)
    assert opposite(paired) == unit


def test_labels_are_unique():
    labels = [unit.value for unit in ALL_UNITS]
    assert len(labels) == len(set(labels))


def test_opposite_rejects_unknown_unit():
    with pytest.raises(UnknownUnitError):
        opposite("furlong")


def test_unknown_unit_error_is_value_error():
    assert issubclass(UnknownUnitError, ValueError)


@pytest.mark.parametrize("text, expected", [
    ("bar", "bar"),
    ("KGF/MM", SpringRateUnit.KGF),
    ("kgf", ForceUnit.KGF),
    (" lb-ft ", TorqueUnit.LBFT),
    (LengthUnit.IN, LengthUnit.IN),
])
def test_parse_unit(text, expected):
    unit = parse_unit(text)
    assert unit == expected
    assert type(unit) in UNIT_TYPES


def test_parse_unit_rejects_unknown_label():
    with pytest.raises(UnknownUnitError, match="Unknown unit"):
        parse_unit("furlong")


def test_global_systems_are_fixed():
    assert units_for_global_system(GlobalUnit.METRIC) == GlobalUnits(
        weight=WeightUnit.KG, power=PowerUnit.KW, torque=TorqueUnit.NM, speed=SpeedUnit.KPH,
    )
    assert units_for_global_system("Imperial") == GlobalUnits(
        weight=WeightUnit.LB, power=PowerUnit.HP, torque=TorqueUnit.LBFT, speed=SpeedUnit.MPH,
    )
    assert units_for_global_system("metric") is units_for_global_system("Metric")


def test_global_system_rejects_unknown():
    with pytest.raises(UnknownUnitError):
        parse_global_unit("Nautical")
