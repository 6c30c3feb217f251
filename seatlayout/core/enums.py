"""
core/enums.py - Core Enumerations

All enumeration types used throughout the seating layout engine.
"""

from enum import Enum


class SpaceType(str, Enum):
    """
    Kind of cell in a seating grid.

    Only SEAT carries seat-specific fields; every other type is a
    structural placeholder.
    """
    SEAT = "seat"
    HALLWAY = "hallway"      # Aisle column
    STAIRS = "stairs"        # Double-decker stairwell
    BATHROOM = "bathroom"
    EMPTY = "empty"          # Reserved/unused cell


class SeatType(str, Enum):
    """
    Seat classes offered on a vehicle.
    """
    REGULAR = "regular"
    PREMIUM = "premium"
    VIP = "vip"
    BUSINESS = "business"
    EXECUTIVE = "executive"
    SLEEPER = "sleeper"


class OmissionPolicy(str, Enum):
    """
    What reconciliation does with stored spaces missing from a submission.
    """
    IGNORE = "ignore"            # Report them only
    DEACTIVATE = "deactivate"    # Emit {active: False} payloads


class ValidationMode(str, Enum):
    """
    How the configuration validator reports violations.
    """
    FAIL_FAST = "fail_fast"   # Raise on the first violation
    COLLECT = "collect"       # Raise once with every violation
