import math


def round_decimal(value: float, places: int = 2) -> float:
    """
    Round `value` to `places` decimal places, halves away from zero.

    :param value: The number to round
    :param places: Number of decimal places to keep
    :return: The rounded value; never negative zero
    """
    factor = 10**places
    rounded = math.floor(abs(value) * factor + 0.5) / factor
    return (rounded if value >= 0 else -rounded) + 0.0
