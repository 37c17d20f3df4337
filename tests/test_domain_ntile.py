"""Tests for NTILE-style bucketing of ranked items."""

from __future__ import annotations

from collections import Counter

import pytest

from northwind_reports.domain import domain_ntile_assign


def test_domain_ntile_assign_gives_remainder_to_earliest_groups() -> None:
    """Give one extra item to each of the first `n % g` groups.

    Returns:
        None: Assertions validate bucket layout.

    Raises:
        AssertionError: Raised when the remainder lands in later groups.
    """

    assert domain_ntile_assign(item_count=12, group_count=5) == [1, 1, 1, 2, 2, 2, 3, 3, 4, 4, 5, 5]
    assert domain_ntile_assign(item_count=10, group_count=5) == [1, 1, 2, 2, 3, 3, 4, 4, 5, 5]


def test_domain_ntile_assign_populates_only_leading_groups_when_items_are_scarce() -> None:
    """Populate groups 1..n when there are fewer items than groups.

    Returns:
        None: Assertions validate sparse layout.

    Raises:
        AssertionError: Raised when sparse layout differs from SQL NTILE.
    """

    assert domain_ntile_assign(item_count=3, group_count=5) == [1, 2, 3]
    assert domain_ntile_assign(item_count=0, group_count=5) == []


@pytest.mark.parametrize("item_count", [1, 4, 5, 6, 89, 91, 100])
def test_domain_ntile_assign_partitions_with_sizes_differing_by_at_most_one(item_count: int) -> None:
    """Assign every item exactly once with near-equal, non-increasing group sizes.

    Returns:
        None: Assertions validate partition properties.

    Raises:
        AssertionError: Raised when a partition property fails.
    """

    group_numbers = domain_ntile_assign(item_count=item_count, group_count=5)
    group_sizes = Counter(group_numbers)

    assert len(group_numbers) == item_count
    assert group_numbers == sorted(group_numbers)
    assert max(group_sizes.values()) - min(group_sizes.values()) <= 1
    ordered_sizes = [group_sizes[group_number] for group_number in sorted(group_sizes)]
    assert ordered_sizes == sorted(ordered_sizes, reverse=True)


def test_domain_ntile_assign_rejects_invalid_counts() -> None:
    """Reject negative item counts and non-positive group counts.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when invalid counts are accepted.
    """

    with pytest.raises(ValueError):
        domain_ntile_assign(item_count=-1, group_count=5)
    with pytest.raises(ValueError):
        domain_ntile_assign(item_count=3, group_count=0)
