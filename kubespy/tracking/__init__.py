"""View projection and per-view snapshot tracking."""

from kubespy.tracking.tracker import StateTracker
from kubespy.tracking.views import apply_view

__all__ = ["StateTracker", "apply_view"]
