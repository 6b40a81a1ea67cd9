"""Projection of a full resource document onto the view being tracked."""

from __future__ import annotations

from collections.abc import Mapping

from kubespy.models.events import Document, View


def apply_view(view: View, doc: Document) -> Document:
    """Return the part of *doc* that *view* tracks.

    The status view never fails: a missing, null or non-mapping ``status``
    (or a document that is not a mapping at all) yields an empty mapping.
    """
    if view is View.FULL:
        return doc
    if isinstance(doc, Mapping):
        status = doc.get("status")
        if isinstance(status, Mapping):
            return status
    return {}
