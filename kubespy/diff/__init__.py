"""Tree diff engine and outcome renderer."""

from kubespy.diff.engine import compare, value_kind
from kubespy.diff.render import DiffRenderer, format_path

__all__ = ["DiffRenderer", "compare", "format_path", "value_kind"]
