"""The spy loop: project, track, render, write, one event at a time.

Events are processed strictly in arrival order; the next event is not
received until the previous one has been fully rendered. ``stop()`` makes
a running loop return at the next receive, even while it is blocked.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Callable

import click

from kubespy.diff.render import DiffRenderer
from kubespy.errors import KubeSpyError, SinkError, StreamError
from kubespy.models.events import View, WatchEvent
from kubespy.observability.logging import get_logger
from kubespy.tracking.tracker import StateTracker
from kubespy.tracking.views import apply_view

_log = get_logger("spy")

Sink = Callable[[str], None]


class SpyLoop:
    """Drives one view of one resource.

    Args:
        view:     Which part of each document to track.
        renderer: Outcome renderer; defaults to a coloured ``DiffRenderer``.
        sink:     Receives every rendered line; defaults to ``click.echo``.
    """

    def __init__(
        self,
        view: View,
        renderer: DiffRenderer | None = None,
        sink: Sink = click.echo,
    ) -> None:
        self.view = view
        self._renderer = renderer or DiffRenderer(view=view)
        self._sink = sink
        self._tracker = StateTracker(view)
        self._stop = asyncio.Event()
        self.processed = 0
        self.rendered = 0

    @property
    def tracker(self) -> StateTracker:
        return self._tracker

    def stop(self) -> None:
        """Ask the loop to return before its next receive. Idempotent."""
        self._stop.set()

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    async def run(self, events: AsyncIterator[WatchEvent]) -> None:
        """Consume *events* until stopped or the stream is exhausted.

        Raises:
            StreamError: the event stream raised.
            RenderError: a document could not be serialised.
            SinkError:   writing to the sink failed.
        """
        log = _log.bind(view=str(self.view))
        iterator = aiter(events)
        try:
            while not self._stop.is_set():
                try:
                    event = await self._receive(iterator)
                except StopAsyncIteration:
                    log.info("event_stream_exhausted", processed=self.processed)
                    return
                except KubeSpyError as exc:
                    exc.view = exc.view or str(self.view)
                    raise
                except Exception as exc:
                    raise StreamError(f"event stream failed: {exc}", view=str(self.view), cause=exc) from exc

                if event is None:
                    break
                self.handle(event)
            log.info("spy_loop_stopped", processed=self.processed)
        except KubeSpyError as exc:
            log.error("spy_loop_failed", stage=exc.stage, error=str(exc), processed=self.processed)
            raise

    def handle(self, event: WatchEvent) -> list[str]:
        """Process a single event synchronously and return the lines written."""
        projected = apply_view(self.view, event.document)
        outcome = self._tracker.observe(event.kind, projected)
        lines = self._renderer.render(outcome)
        self.processed += 1
        _log.debug(
            "event_processed",
            view=str(self.view),
            kind=str(event.kind),
            resource_version=event.resource_version,
            lines=len(lines),
        )
        if not lines:
            return lines
        try:
            for line in lines:
                self._sink(line)
        except Exception as exc:
            raise SinkError(f"cannot write output: {exc}", view=str(self.view), cause=exc) from exc
        self.rendered += 1
        return lines

    async def _receive(self, iterator: AsyncIterator[WatchEvent]) -> WatchEvent | None:
        """Next event, or ``None`` if ``stop()`` won the race."""
        next_task = asyncio.create_task(_anext(iterator))
        stop_task = asyncio.create_task(self._stop.wait())
        try:
            done, _ = await asyncio.wait({next_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            next_task.cancel()
            raise
        finally:
            stop_task.cancel()

        if next_task in done:
            return next_task.result()

        next_task.cancel()
        with contextlib.suppress(asyncio.CancelledError, StopAsyncIteration):
            await next_task
        return None


async def _anext(iterator: AsyncIterator[WatchEvent]) -> WatchEvent:
    return await anext(iterator)
