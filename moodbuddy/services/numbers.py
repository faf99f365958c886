import math


def clamp(n, lo, hi):
    return max(lo, min(hi, n))


def is_finite_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def round_half_up(x: float) -> int:
    # round() của Python làm tròn về số chẵn (2.5 -> 2), ở đây cần 2.5 -> 3
    if not math.isfinite(x):
        return 0
    return int(math.floor(x + 0.5))
