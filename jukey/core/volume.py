"""Volume steps. Spotify only keeps volume reliably on multiples of 10."""
import math

VOLUME_STEP = 10
VOLUME_MIN = 0
VOLUME_MAX = 100


def is_valid_volume(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and VOLUME_MIN <= value <= VOLUME_MAX
    )


def quantize_volume(value: float) -> int:
    """Round up to the next step and clamp, e.g. 5 -> 10, 49 -> 50, 95 -> 100."""
    stepped = math.ceil(value / VOLUME_STEP) * VOLUME_STEP
    return max(VOLUME_MIN, min(VOLUME_MAX, stepped))
