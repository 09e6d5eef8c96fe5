from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike the built-in round()."""
    # Trims float noise such as 64.49999999999999 from weighted sums.
    return int(math.floor(round(value, 9) + 0.5))
