"""Core data structures for kubespy."""

from kubespy.models.config import KubeSpyConfig
from kubespy.models.diff import (
    Changed,
    Created,
    DiffOp,
    DiffResult,
    OpKind,
    Outcome,
    TrackerState,
    ValueKind,
)
from kubespy.models.events import ChangeKind, Document, View, WatchEvent

__all__ = [
    "ChangeKind",
    "Changed",
    "Created",
    "DiffOp",
    "DiffResult",
    "Document",
    "KubeSpyConfig",
    "OpKind",
    "Outcome",
    "TrackerState",
    "ValueKind",
    "View",
    "WatchEvent",
]
