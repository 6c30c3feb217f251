"""
core/constants.py - Constants

Default values applied when generating or creating spaces.
"""

from typing import FrozenSet

from seatlayout.core.enums import SeatType

# ==================== Seat Defaults ====================

DEFAULT_SEAT_TYPE = SeatType.REGULAR
DEFAULT_AMENITIES: FrozenSet[str] = frozenset()
DEFAULT_RECLINEMENT_ANGLE = 120  # degrees, seats created from a submission
GENERATED_RECLINEMENT_ANGLE = 15  # degrees, seats from the default generator
DEFAULT_IS_ACTIVE = True

# Seat numbers are assigned from this value, shared across floors
INITIAL_SEAT_NUMBER_COUNTER = 1

WINDOW_AMENITY = "window"

# ==================== Generated Descriptions ====================

AISLE_DESCRIPTION = "Aisle"
STAIRS_DESCRIPTION = "Stairs to upper floor"
STAIRS_AREA_DESCRIPTION = "Stairs area"
BATHROOM_DESCRIPTION = "Bathroom"
BATHROOM_AREA_DESCRIPTION = "Bathroom area"

# ==================== Record Keys ====================

# Meta flags that only seats carry
SEAT_META_KEYS = ("is_window", "is_legroom")

# camelCase spellings of the meta keys the engine owns; other meta keys are
# caller data and keep their spelling
STRUCTURAL_META_KEYS = {
    "rowIndex": "row_index",
    "colIndex": "col_index",
    "isWindow": "is_window",
    "isLegroom": "is_legroom",
}

TEMPORARY_SEAT_NUMBER_PREFIX = "tmp"
