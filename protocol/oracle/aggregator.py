"""
ORACLE - Price Aggregator

Integer median over source prices.
"""

from collections.abc import Sequence


def median_price(prices: Sequence[int]) -> int:
    """
    Median of fixed-point prices after an ascending sort.

    Odd counts take the middle element. Even counts take the floor of the
    mean of the two middle elements.
    """
    if not prices:
        raise ValueError("median of empty price list")

    ordered = sorted(prices)
    middle = len(ordered) // 2

    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) // 2
    return ordered[middle]
