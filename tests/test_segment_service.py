from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

from segmentation.domain.history import OperationType
from segmentation.exceptions import AlreadyExists, InvalidInput, NotFound, ReadError, SegmentNotFound
from segmentation.services.history_service import HistoryService
from segmentation.services.segment_service import SegmentService
from segmentation.services.segmentation_service import SegmentationService


def test_list_segments_is_empty_list_when_catalog_is_empty(catalog: SegmentService) -> None:
    assert catalog.list_segments() == []


def test_create_and_get_segment(catalog: SegmentService) -> None:
    assert catalog.create_segment("AVITO_VOICE_MESSAGES", "voice messages") == "AVITO_VOICE_MESSAGES"

    segment = catalog.get_by_slug("AVITO_VOICE_MESSAGES")
    assert segment.id > 0
    assert segment.slug == "AVITO_VOICE_MESSAGES"
    assert segment.description == "voice messages"


def test_create_without_description_stores_empty_string(catalog: SegmentService) -> None:
    catalog.create_segment("promo")
    assert catalog.get_by_slug("promo").description == ""


def test_duplicate_slug_is_rejected_and_first_description_kept(catalog: SegmentService) -> None:
    catalog.create_segment("promo", "x")

    with pytest.raises(AlreadyExists):
        catalog.create_segment("promo", "y")

    segments = catalog.list_segments()
    assert [(s.slug, s.description) for s in segments] == [("promo", "x")]


def test_unique_constraint_backs_the_pre_check(catalog: SegmentService, monkeypatch: pytest.MonkeyPatch) -> None:
    catalog.create_segment("promo", "x")
    # Simulate losing the race: the pre-check sees nothing, the insert collides.
    monkeypatch.setattr(catalog.repo, "exists", lambda slug: False)

    with pytest.raises(AlreadyExists):
        catalog.create_segment("promo", "y")
    assert len(catalog.list_segments()) == 1


def test_empty_slug_is_invalid(catalog: SegmentService) -> None:
    with pytest.raises(InvalidInput):
        catalog.create_segment("   ", "blank")


def test_get_unknown_segment_raises_not_found(catalog: SegmentService) -> None:
    with pytest.raises(NotFound):
        catalog.get_by_slug("missing")


def test_update_changes_only_description(catalog: SegmentService) -> None:
    catalog.create_segment("promo", "old")
    before = catalog.get_by_slug("promo")

    updated = catalog.update_segment("promo", "new")

    assert updated.id == before.id
    assert updated.slug == "promo"
    assert updated.description == "new"
    assert catalog.get_by_slug("promo").description == "new"


def test_update_unknown_segment_raises_not_found(catalog: SegmentService) -> None:
    with pytest.raises(SegmentNotFound):
        catalog.update_segment("missing", "whatever")


def test_delete_returns_deleted_segment(catalog: SegmentService) -> None:
    catalog.create_segment("promo", "x")
    created = catalog.get_by_slug("promo")

    deleted = catalog.delete_segment("promo")

    assert deleted == created
    assert catalog.list_segments() == []
    with pytest.raises(SegmentNotFound):
        catalog.delete_segment("promo")


def test_delete_cascades_to_memberships_with_history(
    catalog: SegmentService,
    segmentation: SegmentationService,
    history: HistoryService,
) -> None:
    catalog.create_segment("promo")
    catalog.create_segment("beta")
    alice = segmentation.create_user("alice")
    bob = segmentation.create_user("bob")
    segmentation.add_segment_to_user(alice, "promo")
    segmentation.add_segment_to_user(bob, "promo")
    segmentation.add_segment_to_user(bob, "beta")

    catalog.delete_segment("promo")

    assert segmentation.get_active_segments_of_user(alice).segments == []
    assert [m.slug for m in segmentation.get_active_segments_of_user(bob).segments] == ["beta"]
    removals = [
        (r.user_id, r.slug)
        for r in history.list_history()
        if r.operation_type is OperationType.REMOVING
    ]
    assert removals == [(alice, "promo"), (bob, "promo")]


@pytest.mark.parametrize("slug", [" promo", "promo ", " promo "])
def test_padded_slug_is_rejected(catalog: SegmentService, slug: str) -> None:
    with pytest.raises(InvalidInput):
        catalog.create_segment(slug, "padded")
    assert catalog.list_segments() == []


def test_lookup_failure_during_update_or_delete_is_read_error(
    catalog: SegmentService, session: Session
) -> None:
    catalog.create_segment("promo", "x")
    session.execute(text("DROP TABLE segments"))
    session.commit()

    with pytest.raises(ReadError):
        catalog.update_segment("promo", "y")
    with pytest.raises(ReadError):
        catalog.repo.delete("promo")
