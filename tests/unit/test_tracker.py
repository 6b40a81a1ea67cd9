"""Tests for StateTracker: creation, diffing and baseline replacement."""

from __future__ import annotations

import pytest

from kubespy.diff.engine import compare
from kubespy.models.diff import Changed, Created, DiffOp
from kubespy.models.events import ChangeKind, View
from kubespy.tracking.tracker import StateTracker


class TestFirstObservation:
    @pytest.mark.parametrize("kind", list(ChangeKind))
    def test_first_event_is_always_created(self, kind: ChangeKind) -> None:
        tracker = StateTracker(View.FULL)
        assert tracker.observe(kind, {"x": 1}) == Created({"x": 1})

    def test_fresh_tracker_has_no_snapshot(self) -> None:
        tracker = StateTracker(View.STATUS)
        assert tracker.state.has_snapshot is False
        assert tracker.state.view is View.STATUS

    def test_none_document_still_counts_as_snapshot(self) -> None:
        tracker = StateTracker(View.FULL)
        assert tracker.observe(ChangeKind.ADDED, None) == Created(None)
        assert tracker.observe(ChangeKind.MODIFIED, None) == Changed(ChangeKind.MODIFIED, [])


class TestSubsequentObservations:
    def test_changed_carries_kind_and_diff(self) -> None:
        tracker = StateTracker(View.FULL)
        tracker.observe(ChangeKind.ADDED, {"a": 1})
        outcome = tracker.observe(ChangeKind.MODIFIED, {"a": 1, "b": 2})
        assert outcome == Changed(ChangeKind.MODIFIED, [DiffOp.add(("b",), 2)])

    def test_identical_document_gives_empty_diff(self) -> None:
        tracker = StateTracker(View.FULL)
        tracker.observe(ChangeKind.ADDED, {"a": 1})
        assert tracker.observe(ChangeKind.MODIFIED, {"a": 1}) == Changed(ChangeKind.MODIFIED, [])

    def test_deleted_kind_is_only_a_label(self) -> None:
        tracker = StateTracker(View.FULL)
        tracker.observe(ChangeKind.ADDED, {"a": 1})
        outcome = tracker.observe(ChangeKind.DELETED, {"a": 2})
        assert isinstance(outcome, Changed)
        assert outcome.kind is ChangeKind.DELETED
        assert outcome.diff == [DiffOp.modify(("a",), 1, 2)]


class TestBaseline:
    def test_baseline_advances_on_every_event(self) -> None:
        first, second, third = {"v": 1}, {"v": 2}, {"v": 3}
        tracker = StateTracker(View.FULL)
        tracker.observe(ChangeKind.ADDED, first)
        tracker.observe(ChangeKind.MODIFIED, second)
        outcome = tracker.observe(ChangeKind.MODIFIED, third)
        assert outcome == Changed(ChangeKind.MODIFIED, compare(second, third))
        assert tracker.state.last_snapshot is third

    def test_baseline_advances_on_empty_diff(self) -> None:
        tracker = StateTracker(View.FULL)
        tracker.observe(ChangeKind.ADDED, {"v": 1, "w": 1})
        equal = {"v": 1, "w": 1}
        tracker.observe(ChangeKind.MODIFIED, equal)
        assert tracker.state.last_snapshot is equal
        outcome = tracker.observe(ChangeKind.MODIFIED, {"v": 2, "w": 1})
        assert outcome == Changed(ChangeKind.MODIFIED, [DiffOp.modify(("v",), 1, 2)])

    def test_trackers_share_no_state(self) -> None:
        full = StateTracker(View.FULL)
        status = StateTracker(View.STATUS)
        full.observe(ChangeKind.ADDED, {"a": 1})
        assert status.state.has_snapshot is False
        assert isinstance(status.observe(ChangeKind.MODIFIED, {}), Created)
