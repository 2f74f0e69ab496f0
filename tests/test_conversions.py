import dataclasses

import pytest

from fm_formatter.conversions import (
    MULTIPLIERS,
    convert,
    convert_force_from,
    convert_length,
    convert_pressure,
    convert_pressure_from,
    convert_speed,
    convert_speed_from,
    convert_spring_rate,
    convert_spring_rate_from,
    convert_to_opposite,
    convert_weight_to_mass,
    ensure_float,
    to_fixed,
)
from fm_formatter.units import (
    ForceUnit,
    LengthUnit,
    PowerUnit,
    PressureUnit,
    SpeedUnit,
    SpringRateUnit,
    TorqueUnit,
    WeightUnit,
    opposite,
)

ALL_UNITS = [
    *PressureUnit, *SpringRateUnit, *LengthUnit, *ForceUnit,
    *SpeedUnit, *WeightUnit, *PowerUnit, *TorqueUnit,
]


@pytest.mark.parametrize("unit", ALL_UNITS, ids=str)
@pytest.mark.parametrize("value", [0.0, 1.0, 12.5, 987654.321])
def test_round_trip_returns_original(unit, value):
    there = convert(value, unit)
    back = convert(there, opposite(unit))
    assert back == pytest.approx(value, rel=1e-6, abs=1e-9)


def test_spring_rate_goes_through_newtons():
    expected = 10 / MULTIPLIERS.springs.newtons_kgf * MULTIPLIERS.springs.newtons_lbs
    assert convert_spring_rate(10, SpringRateUnit.KGF, SpringRateUnit.LBS) == pytest.approx(expected)

    reps = convert_spring_rate_from(10, SpringRateUnit.KGF)
    assert reps["newtons"] == pytest.approx(98.0665, rel=1e-6)
    assert reps["kgf"] == pytest.approx(10.0)
    assert reps["lbs"] == pytest.approx(expected)


def test_spring_rate_same_unit_is_identity():
    assert convert_spring_rate(42, SpringRateUnit.LBS, SpringRateUnit.LBS) == pytest.approx(42)


def test_direction_comes_from_source_unit():
    assert convert_pressure(1, PressureUnit.BAR) == pytest.approx(14.5037738, rel=1e-6)
    assert convert_pressure(14.5037738, PressureUnit.PSI) == pytest.approx(1.0, rel=1e-6)
    assert convert_length(10, LengthUnit.CM) == pytest.approx(3.9370078740214)
    assert convert_speed(100, SpeedUnit.KPH) == pytest.approx(62.1371)


def test_all_representation_dicts():
    assert convert_pressure_from(2, PressureUnit.BAR) == {
        "bar": 2.0,
        "psi": pytest.approx(29.0075476, rel=1e-6),
    }
    assert convert_speed_from(62.1371, SpeedUnit.MPH)["kph"] == pytest.approx(100.0)
    assert set(convert_force_from(1, ForceUnit.LBF)) == {"kgf", "lbf"}


def test_weight_to_mass_uses_spring_constants():
    assert convert_weight_to_mass(100, WeightUnit.KG) == pytest.approx(100.0, rel=1e-9)


def test_convert_accepts_labels_and_strings():
    assert convert("1.9", "bar") == pytest.approx(convert(1.9, PressureUnit.BAR))
    assert convert(500, "kW") == pytest.approx(670.51104, rel=1e-6)


@pytest.mark.parametrize("raw, expected", [
    ("1.5", 1.5),
    (" 2 ", 2.0),
    (3, 3.0),
    ("", 0.0),
    ("abc", 0.0),
    (None, 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    (True, 0.0),
])
def test_ensure_float(raw, expected):
    assert ensure_float(raw) == expected


def test_garbage_input_converts_as_zero():
    assert convert("not a number", LengthUnit.CM) == 0.0


@pytest.mark.parametrize("value, precision, expected", [
    (1.005, 2, "1.00"),
    (0.125, 2, "0.13"),
    (2.5, 0, "3"),
    (-1.5, 0, "-2"),
    (-0.0, 1, "0.0"),
    (3.5, 2, "3.50"),
    (1e21, 0, "1000000000000000000000"),
    (0.000001, 2, "0.00"),
])
def test_to_fixed(value, precision, expected):
    assert to_fixed(value, precision) == expected


@pytest.mark.parametrize("value, unit, precision, expected", [
    ("1.9", PressureUnit.BAR, 1, "27.6"),
    ("2.0", PressureUnit.BAR, 1, "29.0"),
    ("1400", WeightUnit.KG, 0, "3086"),
    ("500", PowerUnit.KW, 0, "671"),
    ("100", ForceUnit.KGF, 1, "220.5"),
    ("1.0", LengthUnit.CM, 1, "0.4"),
])
def test_convert_to_opposite(value, unit, precision, expected):
    assert convert_to_opposite(value, unit, precision) == expected


def test_multipliers_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MULTIPLIERS.pressure = 1.0
