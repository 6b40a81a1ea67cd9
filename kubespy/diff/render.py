"""Human-readable rendering of tracker outcomes.

Each outcome becomes a block of lines: a heading (``CREATED`` or the
change kind) followed by the body. A change with an empty diff renders to
no lines at all.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

import click

from kubespy.errors import RenderError
from kubespy.models.diff import Changed, Created, DiffOp, OpKind, Outcome, PathElement
from kubespy.models.events import Document, View

_OP_MARKERS = {
    OpKind.ADD: ("+", "green"),
    OpKind.REMOVE: ("-", "red"),
    OpKind.MODIFY: ("~", "yellow"),
}


def format_path(path: Sequence[PathElement]) -> str:
    """Join a diff path with slashes; the document root renders as ``/``.

    Keys are escaped as in JSON Pointer (``~`` as ``~0``, ``/`` as ``~1``) so
    that ``app.kubernetes.io/name`` stays one segment.
    """
    if not path:
        return "/"
    return "/".join(_segment(element) for element in path)


def _segment(element: PathElement) -> str:
    if isinstance(element, int):
        return str(element)
    return element.replace("~", "~0").replace("/", "~1")


class DiffRenderer:
    """Turns outcomes into display lines.

    Args:
        color: Wrap lines in ANSI emphasis via ``click.style``.
        view:  Name of the view being rendered, used in error context only.
    """

    def __init__(self, color: bool = True, view: View | str = "") -> None:
        self._color = color
        self._view = str(view)

    def render(self, outcome: Outcome) -> list[str]:
        if isinstance(outcome, Created):
            return self._render_created(outcome)
        return self._render_changed(outcome)

    def banner(self, view: View, resource: str) -> str:
        """Line announcing what is being watched."""
        if view is View.STATUS:
            text = f"Watching status of {resource}"
        else:
            text = f"Watching for changes on {resource}"
        return self._style(text, fg="green")

    def _render_created(self, outcome: Created) -> list[str]:
        body = self._dumps(outcome.document, indent=2)
        lines = [self._heading("CREATED")]
        lines.extend(self._style(line, fg="green") for line in body.splitlines())
        return lines

    def _render_changed(self, outcome: Changed) -> list[str]:
        if not outcome.diff:
            return []
        lines = [self._heading(str(outcome.kind))]
        lines.extend(self._render_op(op) for op in outcome.diff)
        return lines

    def _render_op(self, op: DiffOp) -> str:
        marker, colour = _OP_MARKERS[op.op]
        path = format_path(op.path)
        if op.op is OpKind.ADD:
            text = f"{marker} {path}: {self._dumps(op.new_value)}"
        elif op.op is OpKind.REMOVE:
            text = f"{marker} {path}: {self._dumps(op.old_value)}"
        else:
            text = f"{marker} {path}: {self._dumps(op.old_value)} -> {self._dumps(op.new_value)}"
        return self._style(text, fg=colour)

    def _heading(self, text: str) -> str:
        return self._style(text, fg="blue", bold=True)

    def _style(self, text: str, **styles: object) -> str:
        if not self._color:
            return text
        return click.style(text, **styles)  # type: ignore[arg-type]

    def _dumps(self, value: Document, indent: int | None = None) -> str:
        try:
            if indent is None:
                return json.dumps(value, ensure_ascii=False, allow_nan=False)
            return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise RenderError(
                f"cannot serialise {type(value).__name__} for display: {exc}",
                view=self._view,
                cause=exc,
            ) from exc
