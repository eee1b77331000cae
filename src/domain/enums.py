"""Domain enumerations and fixed unit-conversion rules."""

import enum


class DistanceUnit(str, enum.Enum):
    KM = "km"
    MILES = "miles"
    NM = "nm"


# Conversion: maps unit -> multiplier applied to a distance in kilometres
KM_CONVERSIONS: dict[DistanceUnit, float] = {
    DistanceUnit.KM: 1.0,
    DistanceUnit.MILES: 0.621371,
    DistanceUnit.NM: 0.539957,
}


class AircraftType(str, enum.Enum):
    ULTRALIGHT = "ultralight"
    LIGHT = "light"
    HEAVY = "heavy"
    COMMERCIAL = "commercial"
    CARGO = "cargo"
    MILITARY = "military"


class Manufacturer(str, enum.Enum):
    AIRBUS = "Airbus"
    ANTONOV = "Antonov"
    BOEING = "Boeing"
    BOMBARDIER = "Bombardier"
    GULFSTREAM = "Gulfstream"
