"""Recursive structural diff between two JSON-like documents.

Rules, applied at every path:

* mapping vs mapping: keys of ``current`` are walked in insertion order
  (new keys become ADD, shared keys recurse), then keys only in
  ``previous`` are walked in their insertion order and become REMOVE.
* sequence vs sequence: compared position by position up to the longer
  length. An insertion near the front therefore shows up as a cascade of
  per-index changes, not as a single insert.
* anything else: MODIFY when the values differ, nothing when equal.

Containers never produce a MODIFY of their own; only leaves, added keys
and removed keys do.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from kubespy.models.diff import DiffOp, DiffResult, PathElement, ValueKind
from kubespy.models.events import Document


def value_kind(value: Document) -> ValueKind:
    """Classify *value*. ``bool`` is checked before numbers on purpose."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int | float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    # Not a JSON type; compared as an opaque scalar.
    return ValueKind.STRING


def compare(previous: Document, current: Document) -> DiffResult:
    """Return the ordered list of changes turning *previous* into *current*."""
    ops: DiffResult = []
    _compare(previous, current, (), ops)
    return ops


def _compare(
    previous: Document,
    current: Document,
    path: tuple[PathElement, ...],
    ops: DiffResult,
) -> None:
    prev_kind = value_kind(previous)
    curr_kind = value_kind(current)

    if prev_kind != curr_kind:
        ops.append(DiffOp.modify(path, previous, current))
    elif curr_kind is ValueKind.MAPPING:
        _compare_mappings(previous, current, path, ops)
    elif curr_kind is ValueKind.SEQUENCE:
        _compare_sequences(previous, current, path, ops)
    elif previous != current:
        ops.append(DiffOp.modify(path, previous, current))


def _compare_mappings(
    previous: Mapping[str, Document],
    current: Mapping[str, Document],
    path: tuple[PathElement, ...],
    ops: DiffResult,
) -> None:
    for key, value in current.items():
        if key in previous:
            _compare(previous[key], value, (*path, key), ops)
        else:
            ops.append(DiffOp.add((*path, key), value))
    for key, value in previous.items():
        if key not in current:
            ops.append(DiffOp.remove((*path, key), value))


def _compare_sequences(
    previous: Sequence[Document],
    current: Sequence[Document],
    path: tuple[PathElement, ...],
    ops: DiffResult,
) -> None:
    shared = min(len(previous), len(current))
    for index in range(shared):
        _compare(previous[index], current[index], (*path, index), ops)
    for index in range(shared, len(previous)):
        ops.append(DiffOp.remove((*path, index), previous[index]))
    for index in range(shared, len(current)):
        ops.append(DiffOp.add((*path, index), current[index]))
