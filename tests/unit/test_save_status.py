"""Unit tests for the remote save status state machine."""

import pytest

from resume_maker.contexts.persistence import SaveInProgressError, SaveState, SaveStatus, SaveTracker


@pytest.mark.unit
def test_initial_status_is_unsaved():
    tracker = SaveTracker()
    assert tracker.status == SaveStatus(SaveState.UNSAVED)
    assert tracker.existing_id is None


@pytest.mark.unit
def test_successful_save():
    tracker = SaveTracker()

    assert tracker.begin().state is SaveState.SAVING
    status = tracker.succeed("id-1", "slug-1")

    assert status == SaveStatus.saved("id-1", "slug-1")
    assert tracker.existing_id == "id-1"


@pytest.mark.unit
def test_first_save_failure_returns_to_unsaved():
    tracker = SaveTracker()
    tracker.begin()
    assert tracker.fail() == SaveStatus()


@pytest.mark.unit
def test_later_save_failure_keeps_previous_saved():
    """Test that a failed update keeps the id and slug of the last good save."""
    tracker = SaveTracker()
    tracker.begin()
    tracker.succeed("id-1", "slug-1")

    tracker.begin()
    assert tracker.status.state is SaveState.SAVING
    assert tracker.existing_id == "id-1"

    assert tracker.fail() == SaveStatus.saved("id-1", "slug-1")


@pytest.mark.unit
def test_overlapping_save_rejected():
    tracker = SaveTracker()
    tracker.begin()

    with pytest.raises(SaveInProgressError):
        tracker.begin()
    assert tracker.status.state is SaveState.SAVING


@pytest.mark.unit
def test_resolve_without_begin_is_an_error():
    tracker = SaveTracker()
    with pytest.raises(RuntimeError):
        tracker.succeed("id", "slug")
    with pytest.raises(RuntimeError):
        tracker.fail()


@pytest.mark.unit
def test_opened_public_has_slug_without_id():
    """Test that a public document's next save creates a new resume."""
    tracker = SaveTracker()
    status = tracker.opened_public("shared")

    assert status.state is SaveState.SAVED
    assert status.slug == "shared"
    assert tracker.existing_id is None


@pytest.mark.unit
def test_tracker_resumes_from_stored_status():
    tracker = SaveTracker(SaveStatus.saved("id-9", "slug-9"))
    assert tracker.existing_id == "id-9"
