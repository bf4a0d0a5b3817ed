"""Two-pointer intersection of sorted identifier lists.

Used to AND together the per-term id sets of a multi-word index query.
Both inputs MUST be sorted ascending; the output is sorted and has no duplicates.
"""

from collections.abc import Sequence


def intersect_sorted(left: Sequence[str], right: Sequence[str]) -> list[str]:
    """Return the sorted intersection of two sorted sequences.

    Examples:
        >>> intersect_sorted(["a1", "a2"], ["a2", "a3"])
        ['a2']
        >>> intersect_sorted(["a1"], [])
        []
    """
    if not left or not right:
        return []

    result: list[str] = []
    i = j = 0
    while i < len(left) and j < len(right):
        a, b = left[i], right[j]
        if a < b:
            i += 1
        elif a > b:
            j += 1
        else:
            if not result or result[-1] != a:
                result.append(a)
            i += 1
            j += 1
    return result
