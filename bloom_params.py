# bloom_params.py

import math

_LN2 = math.log(2.0)


def _round_half_up(x: float) -> int:
    # round() rounds half to even
    return int(math.floor(x + 0.5))


def compute_bitmap_size(expected_items: int, fp_rate: float) -> int:
    """
    Bitmap size in BYTES needed to hold `expected_items` at false-positive
    probability `fp_rate`, assuming k is chosen with optimal_k():

        bytes = round(n * ln(p) / (-8 * ln(2)^2))

    n == 0 gives 0; a zero-sized filter reports every item as present.
    """
    if expected_items < 0:
        raise ValueError(f"expected_items must be >= 0, got {expected_items}")
    if not 0.0 < fp_rate < 1.0:
        raise ValueError(f"fp_rate must be in (0, 1), got {fp_rate}")
    return _round_half_up(expected_items * math.log(fp_rate) / (-8.0 * _LN2 * _LN2))


def optimal_k(bit_count: int, expected_items: int) -> int:
    """Hash rounds minimising the FP rate: max(1, ceil(m / n * ln 2))."""
    n = max(int(expected_items), 1)
    return max(1, math.ceil(bit_count / n * _LN2))


def estimated_fp_rate(bit_count: int, k: int, items: int) -> float:
    """Textbook estimate (1 - e^(-k*n/m))^k for `items` inserted."""
    if bit_count <= 0:
        return 1.0
    if items <= 0:
        return 0.0
    return (1.0 - math.exp(-k * items / bit_count)) ** k
