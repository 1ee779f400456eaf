"""Unit tests for status classification."""

import pytest

from request_metrics.core.classifier import StatusBuckets, classify_status

EXACT = {200, 404, 500}


@pytest.mark.parametrize(
    "status, expected",
    [
        (404, StatusBuckets(exact=404, group=4, other=False)),
        (200, StatusBuckets(exact=200, group=2, other=False)),
        (418, StatusBuckets(exact=None, group=4, other=False)),
        (101, StatusBuckets(exact=None, group=1, other=False)),
        (599, StatusBuckets(exact=None, group=5, other=False)),
        (600, StatusBuckets(exact=None, group=None, other=True)),
        (999, StatusBuckets(exact=None, group=None, other=True)),
        (50, StatusBuckets(exact=None, group=None, other=True)),
        (0, StatusBuckets(exact=None, group=None, other=True)),
        (-404, StatusBuckets(exact=None, group=None, other=True)),
    ],
)
def test_classify_status(status, expected):
    assert classify_status(status, EXACT) == expected


def test_exact_code_outside_groups_still_matches():
    """An exact mapping fires on its own even when no group applies."""
    assert classify_status(700, {700}) == StatusBuckets(exact=700, group=None, other=False)


def test_accepts_mapping_of_exact_codes():
    assert classify_status(404, {404: "meter"}).exact == 404


def test_no_exact_codes():
    assert classify_status(200, ()) == StatusBuckets(exact=None, group=2, other=False)
