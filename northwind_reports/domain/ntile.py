"""NTILE-style ordinal bucketing for ranked sequences."""

from __future__ import annotations


def domain_ntile_assign(item_count: int, group_count: int) -> list[int]:
    """Assign 1-based group numbers to `item_count` ranked items.

    Items are split into `group_count` buckets in rank order. Each bucket holds
    `item_count // group_count` items and the first `item_count % group_count`
    buckets hold one extra. With fewer items than groups only groups
    `1..item_count` are populated. This matches SQL `NTILE(group_count)`.

    Args:
        item_count: Number of ranked items.
        group_count: Number of buckets.

    Returns:
        list[int]: Group number per item position, non-decreasing.

    Raises:
        ValueError: Raised when counts are negative or group_count is not positive.
    """

    if item_count < 0:
        raise ValueError("item_count must not be negative")
    if group_count < 1:
        raise ValueError("group_count must be positive")

    base_size, remainder = divmod(item_count, group_count)
    group_numbers: list[int] = []
    for group_number in range(1, group_count + 1):
        group_size = base_size + 1 if group_number <= remainder else base_size
        group_numbers.extend([group_number] * group_size)
    return group_numbers


__all__ = ["domain_ntile_assign"]
