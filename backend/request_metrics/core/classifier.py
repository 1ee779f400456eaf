"""Status-code classification into exact, group and catch-all buckets."""

from collections.abc import Container
from typing import NamedTuple, Optional

STATUS_GROUPS = (1, 2, 3, 4, 5)


class StatusBuckets(NamedTuple):
    """Which meters a status code should mark."""

    exact: Optional[int]
    group: Optional[int]
    other: bool


def classify_status(status: int, exact_codes: Container[int]) -> StatusBuckets:
    """Classify *status* against the configured exact codes.

    Exact and group buckets are independent; ``other`` is set only when
    neither matches.  Out-of-range values (50, 600, -1) have no group.
    """
    exact = status if status in exact_codes else None
    group = status // 100
    if group not in STATUS_GROUPS:
        group = None
    return StatusBuckets(exact=exact, group=group, other=exact is None and group is None)
