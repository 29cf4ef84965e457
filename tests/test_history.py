from __future__ import annotations

from datetime import datetime

import pytest

from segmentation.domain.history import OperationType
from segmentation.exceptions import InvalidInput
from segmentation.services.history_service import HistoryService
from segmentation.services.segment_service import SegmentService
from segmentation.services.segmentation_service import SegmentationService

from .conftest import FakeClock


@pytest.fixture()
def timeline(
    segmentation: SegmentationService, catalog: SegmentService, clock: FakeClock
) -> tuple[int, int]:
    catalog.create_segment("promo")
    catalog.create_segment("beta")
    alice = segmentation.create_user("alice")
    bob = segmentation.create_user("bob")

    clock.now = datetime(2026, 1, 31, 23, 59, 59)
    segmentation.add_segment_to_user(alice, "promo")
    clock.now = datetime(2026, 2, 1, 0, 0, 0)
    segmentation.add_segment_to_user(bob, "beta")
    clock.now = datetime(2026, 2, 28, 12, 0, 0)
    segmentation.remove_segment_from_user(alice, "promo")
    clock.now = datetime(2026, 3, 1, 0, 0, 0)
    segmentation.add_segment_to_user(alice, "beta")
    return alice, bob


def test_history_records_are_stamped_with_the_clock(history: HistoryService, timeline: tuple[int, int]) -> None:
    alice, _ = timeline
    records = history.list_history(user_id=alice)

    assert [(r.slug, r.operation_type, r.action_date) for r in records] == [
        ("promo", OperationType.ADDING, datetime(2026, 1, 31, 23, 59, 59)),
        ("promo", OperationType.REMOVING, datetime(2026, 2, 28, 12, 0, 0)),
        ("beta", OperationType.ADDING, datetime(2026, 3, 1, 0, 0, 0)),
    ]


def test_history_for_month_includes_start_and_excludes_next_month(
    history: HistoryService, timeline: tuple[int, int]
) -> None:
    alice, bob = timeline
    records = history.history_for_period(2026, 2)

    assert [(r.user_id, r.slug, r.operation_type) for r in records] == [
        (bob, "beta", OperationType.ADDING),
        (alice, "promo", OperationType.REMOVING),
    ]


def test_history_for_month_filtered_by_user(history: HistoryService, timeline: tuple[int, int]) -> None:
    alice, _ = timeline
    records = history.history_for_period(2026, 2, user_id=alice)
    assert [(r.slug, r.operation_type) for r in records] == [("promo", OperationType.REMOVING)]


def test_history_for_december_rolls_over_the_year(history: HistoryService) -> None:
    assert history.history_for_period(2025, 12) == []


@pytest.mark.parametrize("month", [0, 13])
def test_history_for_invalid_month(history: HistoryService, month: int) -> None:
    with pytest.raises(InvalidInput):
        history.history_for_period(2026, month)


def test_history_rejects_inverted_range(history: HistoryService) -> None:
    with pytest.raises(InvalidInput):
        history.list_history(since=datetime(2026, 2, 1), until=datetime(2026, 1, 1))


def test_history_for_last_representable_december(
    segmentation: SegmentationService, catalog: SegmentService, history: HistoryService, clock: FakeClock
) -> None:
    catalog.create_segment("promo")
    alice = segmentation.create_user("alice")
    clock.now = datetime(9999, 11, 30, 23, 59, 59)
    segmentation.add_segment_to_user(alice, "promo")
    clock.now = datetime(9999, 12, 31, 23, 59, 59)
    segmentation.remove_segment_from_user(alice, "promo")

    records = history.history_for_period(9999, 12)

    assert [(r.slug, r.operation_type) for r in records] == [("promo", OperationType.REMOVING)]
