"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

FIRST_SLOT_NUMBER = 1
CARRY_FORWARD_LOOKBACK_DAYS = 1
DEFAULT_GUARD_HISTORY_DAYS = 30
PAY_RATE_QUANTUM = Decimal("0.01")
