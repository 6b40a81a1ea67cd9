"""Property-based tests for the diff engine.

Uses hypothesis to generate arbitrary JSON-like documents and checks:
 1. Identity: a document compared with itself (or a deep copy) is unchanged
 2. Swapping inputs mirrors every op on the same set of paths
 3. Every differing top-level key of two mappings appears in some op path
 4. Paths are unique within one result
"""

from __future__ import annotations

import copy

from hypothesis import given, settings
from hypothesis import strategies as st

from kubespy.diff.engine import compare
from kubespy.models.diff import DiffOp, OpKind

_scalars = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-1000, max_value=1000)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=8)
)

_documents = st.recursive(
    _scalars,
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=4), children, max_size=4),
    max_leaves=25,
)

_mappings = st.dictionaries(st.sampled_from(["a", "b", "c", "d", "e"]), _documents, max_size=5)


def _mirror(op: DiffOp) -> DiffOp:
    if op.op is OpKind.ADD:
        return DiffOp.remove(op.path, op.new_value)
    if op.op is OpKind.REMOVE:
        return DiffOp.add(op.path, op.old_value)
    return DiffOp.modify(op.path, op.new_value, op.old_value)


class TestIdentity:
    @given(doc=_documents)
    @settings(max_examples=200)
    def test_same_document_has_empty_diff(self, doc: object) -> None:
        assert compare(doc, doc) == []

    @given(doc=_documents)
    @settings(max_examples=100)
    def test_deep_copy_has_empty_diff(self, doc: object) -> None:
        assert compare(doc, copy.deepcopy(doc)) == []


class TestSymmetry:
    @given(a=_documents, b=_documents)
    @settings(max_examples=200)
    def test_swapping_inputs_mirrors_ops(self, a: object, b: object) -> None:
        forward = {op.path: op for op in compare(a, b)}
        backward = {op.path: op for op in compare(b, a)}
        assert forward.keys() == backward.keys()
        for path, op in forward.items():
            assert backward[path] == _mirror(op)


class TestKeySetCompleteness:
    @given(a=_mappings, b=_mappings)
    @settings(max_examples=200)
    def test_every_differing_key_is_reported(self, a: dict, b: dict) -> None:
        ops = compare(a, b)
        touched = {op.path[0] for op in ops}
        for key in a.keys() | b.keys():
            unchanged = key in a and key in b and compare(a[key], b[key]) == []
            assert (key in touched) != unchanged


class TestPathsUnique:
    @given(a=_documents, b=_documents)
    @settings(max_examples=100)
    def test_no_path_reported_twice(self, a: object, b: object) -> None:
        paths = [op.path for op in compare(a, b)]
        assert len(paths) == len(set(paths))
