import math


def round_half_up(x: float) -> int:
    # 12.5 -> 13, unlike round()
    return int(math.floor(x + 0.5))


def percent(part, whole) -> int:
    if not whole:
        return 0
    return round_half_up(100 * part / whole)


def trees_planted(progress: int) -> int:
    # one tree per 10% of completed challenges
    return max(0, int(progress)) // 10
