"""Per-view state tracking across the watch stream."""

from __future__ import annotations

from kubespy.diff.engine import compare
from kubespy.models.diff import Changed, Created, Outcome, TrackerState
from kubespy.models.events import ChangeKind, Document, View


class StateTracker:
    """Remembers the previous snapshot of one view and diffs against it.

    The first observation is always reported as ``Created``, whatever its
    change kind. Every observation, including one with an empty diff,
    replaces the baseline.
    """

    def __init__(self, view: View) -> None:
        self._state = TrackerState(view=view)

    @property
    def view(self) -> View:
        return self._state.view

    @property
    def state(self) -> TrackerState:
        return self._state

    def observe(self, kind: ChangeKind, projected: Document) -> Outcome:
        state = self._state
        outcome: Outcome
        if not state.has_snapshot:
            outcome = Created(projected)
        else:
            outcome = Changed(kind, compare(state.last_snapshot, projected))
        state.last_snapshot = projected
        state.has_snapshot = True
        return outcome
