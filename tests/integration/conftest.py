"""Shared fixtures for kubespy integration tests.

Provides realistic Pod documents, scripted and queue-driven event
streams, and a line-collecting sink so the whole spy pipeline can be
exercised without a Kubernetes cluster.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator, Iterable
from typing import Any

import pytest

from kubespy.diff.render import DiffRenderer
from kubespy.models.events import ChangeKind, View, WatchEvent
from kubespy.spy import SpyLoop

# ---------------------------------------------------------------------------
# Document factories
# ---------------------------------------------------------------------------


def make_pod(
    name: str = "nginx",
    namespace: str = "default",
    phase: str | None = "Pending",
    resource_version: str = "1",
    labels: dict[str, str] | None = None,
    conditions: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Create a Pod document shaped like a watch ``raw_object``."""
    pod: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "resourceVersion": resource_version,
            "labels": labels or {"app": name},
        },
        "spec": {
            "containers": [{"name": name, "image": f"{name}:1.25"}],
            "nodeName": "worker-1",
        },
    }
    if phase is not None:
        pod["status"] = {"phase": phase, "conditions": conditions or []}
    return pod


def evolve(doc: dict[str, Any], **changes: Any) -> dict[str, Any]:
    """Deep-copy *doc* and apply ``section__key=value`` style changes."""
    new = copy.deepcopy(doc)
    for dotted, value in changes.items():
        *parents, leaf = dotted.split("__")
        node = new
        for parent in parents:
            node = node.setdefault(parent, {})
        node[leaf] = value
    return new


def make_event(doc: Any, kind: ChangeKind = ChangeKind.MODIFIED) -> WatchEvent:
    rv = ""
    if isinstance(doc, dict):
        rv = str(doc.get("metadata", {}).get("resourceVersion", ""))
    return WatchEvent(kind=kind, document=doc, resource_version=rv)


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------


async def scripted_stream(events: Iterable[WatchEvent | BaseException]) -> AsyncIterator[WatchEvent]:
    """Yield *events* in order; an exception entry is raised in place."""
    for item in events:
        await asyncio.sleep(0)
        if isinstance(item, BaseException):
            raise item
        yield item


async def queue_stream(queue: asyncio.Queue[WatchEvent]) -> AsyncIterator[WatchEvent]:
    """Never-ending stream fed by the test through *queue*."""
    while True:
        yield await queue.get()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def lines() -> list[str]:
    return []


@pytest.fixture()
def full_loop(lines: list[str]) -> SpyLoop:
    return SpyLoop(View.FULL, renderer=DiffRenderer(color=False, view=View.FULL), sink=lines.append)


@pytest.fixture()
def status_loop(lines: list[str]) -> SpyLoop:
    return SpyLoop(View.STATUS, renderer=DiffRenderer(color=False, view=View.STATUS), sink=lines.append)
