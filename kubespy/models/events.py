"""Watch event data structures and enumerations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# A JSON-compatible tree: None, bool, int/float, str, list, or dict[str, ...].
Document = Any


class ChangeKind(StrEnum):
    """Reason a new document arrived, valued as the K8s watch ``type``."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"
    BOOKMARK = "BOOKMARK"


class View(StrEnum):
    """Named extraction rule applied to every observed document."""

    FULL = "full"
    STATUS = "status"


@dataclass(frozen=True)
class WatchEvent:
    """One observed state of the watched resource.

    Produced by the resource watcher, consumed by the spy loop.
    The document is never mutated after the event is created.
    """

    kind: ChangeKind
    document: Document
    resource_version: str = ""
