"""Value comparison functions used by the node differ."""

from __future__ import annotations

from typing import Any


def compare_strings(expected: str, actual: str, ignore_whitespace: bool = False) -> bool:
    """
    Compare two string values.

    Args:
        expected: The control value
        actual: The test value
        ignore_whitespace: Trim leading and trailing whitespace before comparing.
            Internal whitespace is never collapsed.

    Returns:
        True if the values match
    """
    if ignore_whitespace:
        return expected.strip() == actual.strip()
    return expected == actual


def values_equal(expected: Any, actual: Any, ignore_whitespace: bool = False) -> bool:
    """
    Compare two possibly absent values.

    Two absent values are equal, an absent and a present value are not,
    strings go through compare_strings and anything else uses ==.
    """
    if expected is None:
        return actual is None
    if actual is None:
        return False

    if isinstance(expected, str) and isinstance(actual, str):
        return compare_strings(expected, actual, ignore_whitespace)

    return expected == actual
