"""Ratio and rounding helpers for portfolio metrics.

All rounding is half-up on ``Decimal`` so that published figures match
the usual spreadsheet convention (``8591.065`` becomes ``8591.07``).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from pricing_warehouse.exceptions import DivisionUndefined

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _to_decimal(value: Decimal | int | float) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal | int | float, places: int) -> Decimal:
    """Round to ``places`` decimal places, halves away from zero."""
    return _to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round1(value: Decimal | int | float) -> float:
    return float(round_half_up(value, 1))


def round2(value: Decimal | int | float) -> float:
    return float(round_half_up(value, 2))


def round3(value: Decimal | int | float) -> float:
    return float(round_half_up(value, 3))


def whole(value: Decimal | int | float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(round_half_up(value, 0))


def ratio(numerator: Decimal | int | float, denominator: Decimal | int | float) -> Decimal:
    """Divide two quantities.

    Raises
    ------
    DivisionUndefined
        If ``denominator`` is zero.
    """
    denominator = _to_decimal(denominator)
    if denominator == 0:
        raise DivisionUndefined(f"ratio of {numerator} over zero is undefined")
    return _to_decimal(numerator) / denominator


def percentage(
    numerator: Decimal | int | float,
    denominator: Decimal | int | float,
    places: int,
) -> float | None:
    """Percentage rounded to ``places``, or None over a zero denominator."""
    try:
        return float(round_half_up(ratio(numerator, denominator) * HUNDRED, places))
    except DivisionUndefined:
        logger.debug("Percentage %s / %s undefined, reporting null", numerator, denominator)
        return None


def per_unit(numerator: Decimal | int | float, denominator: Decimal | int | float) -> int | None:
    """Whole-number average, or None over a zero denominator."""
    try:
        return whole(ratio(numerator, denominator))
    except DivisionUndefined:
        return None
