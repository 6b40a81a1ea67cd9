"""Structural diff data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from kubespy.models.events import ChangeKind, Document, View

PathElement = str | int


class ValueKind(StrEnum):
    """Closed set of value kinds a document node can take."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class OpKind(StrEnum):
    """Type of a single structural change."""

    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"


@dataclass(frozen=True)
class DiffOp:
    """A single change located by ``path`` inside a document tree.

    ``old_value`` is unset for ADD, ``new_value`` is unset for REMOVE.
    """

    op: OpKind
    path: tuple[PathElement, ...]
    old_value: Document = None
    new_value: Document = None

    @classmethod
    def add(cls, path: tuple[PathElement, ...], value: Document) -> DiffOp:
        return cls(OpKind.ADD, path, new_value=value)

    @classmethod
    def remove(cls, path: tuple[PathElement, ...], value: Document) -> DiffOp:
        return cls(OpKind.REMOVE, path, old_value=value)

    @classmethod
    def modify(cls, path: tuple[PathElement, ...], old: Document, new: Document) -> DiffOp:
        return cls(OpKind.MODIFY, path, old_value=old, new_value=new)


# Ordered; empty means "no observable change".
DiffResult = list[DiffOp]


@dataclass(frozen=True)
class Created:
    """First document ever observed for a view."""

    document: Document


@dataclass(frozen=True)
class Changed:
    """A later document, with its diff against the previous one."""

    kind: ChangeKind
    diff: DiffResult = field(default_factory=list)


Outcome = Created | Changed


@dataclass
class TrackerState:
    """Last snapshot seen for one view.

    ``has_snapshot`` separates "nothing observed yet" from an observed
    document that happens to be ``None``.
    """

    view: View
    last_snapshot: Document = None
    has_snapshot: bool = False
