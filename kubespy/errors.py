"""Exception hierarchy for kubespy.

Only the run loop, the watcher and the bootstrap raise these; the diff
engine, projection and tracker are total and never fail.
"""

from __future__ import annotations


class KubeSpyError(Exception):
    """Base class for fatal kubespy errors.

    Carries the pipeline ``stage`` that failed and, where known, the
    ``view`` being tracked so that the report is enough to diagnose.
    """

    stage = "unknown"

    def __init__(self, message: str, *, view: str = "", cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.view = view
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        where = f"{self.stage}/{self.view}" if self.view else self.stage
        return f"[{where}] {base}"


class WatchError(KubeSpyError):
    """The resource watch cannot continue (discovery, auth, retries exhausted)."""

    stage = "watch"


class StreamError(KubeSpyError):
    """The event stream feeding the spy loop raised."""

    stage = "watch"


class RenderError(KubeSpyError):
    """A document could not be serialised for display."""

    stage = "render"


class SinkError(KubeSpyError):
    """Writing rendered lines to the output sink failed."""

    stage = "sink"


class StartupError(KubeSpyError):
    """Raised when a mandatory component fails to start."""

    stage = "startup"

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}", cause=cause)
        self.component = component
