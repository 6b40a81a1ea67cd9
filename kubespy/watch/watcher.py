"""Watch-forever stream of one resource, backed by the kubernetes-asyncio dynamic client.

The watcher owns reconnection: a server-side watch timeout resumes from the
last resourceVersion, a 410 Gone restarts from a fresh list, and transient
API/connection failures are retried with exponential back-off. Anything
else, or running out of retries, raises ``WatchError`` and ends the stream.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import aiohttp
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]
from kubernetes_asyncio.dynamic.exceptions import ResourceNotFoundError  # type: ignore[import-untyped]

from kubespy.errors import WatchError
from kubespy.models.config import WatchConfig
from kubespy.models.events import ChangeKind, Document, WatchEvent
from kubespy.observability.logging import get_logger
from kubespy.watch.resource import ResourceRef

_HTTP_GONE = 410
# Auth and "no such thing" failures will not fix themselves on retry.
_FATAL_STATUSES = frozenset({400, 401, 403, 404})


class ResourceWatcher:
    """Yields ``WatchEvent`` values for a single named resource, forever.

    Args:
        dynamic_client:    An initialised ``kubernetes_asyncio.dynamic.DynamicClient``.
        ref:               The resource to watch.
        config:            Timeout and retry settings.
        default_namespace: Used for namespaced kinds when ``ref`` has no namespace.
        sleep:             Back-off sleeper, replaceable in tests.
    """

    def __init__(
        self,
        dynamic_client: Any,
        ref: ResourceRef,
        config: WatchConfig | None = None,
        default_namespace: str = "default",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = dynamic_client
        self._ref = ref
        self._config = config or WatchConfig()
        self._default_namespace = default_namespace
        self._sleep = sleep
        self._log = get_logger("watch.watcher").bind(resource=str(ref))

    async def events(self) -> AsyncIterator[WatchEvent]:
        resource = await self._resolve()
        namespace = self._namespace_for(resource)
        resource_version: str | None = None
        failures = 0

        while True:
            try:
                async for raw in self._client.watch(
                    resource,
                    namespace=namespace,
                    name=self._ref.name,
                    resource_version=resource_version,
                    timeout=self._config.timeout_seconds,
                ):
                    event_type = str(raw.get("type", ""))
                    obj = _raw_object(raw)

                    if event_type == ChangeKind.ERROR:
                        if _status_code(obj) != _HTTP_GONE:
                            raise WatchError(f"watch error event for {self._ref}: {_status_message(obj)}")
                        self._log.info("watch_resource_version_expired", resource_version=resource_version)
                        resource_version = None
                        break

                    rv = _resource_version(obj)
                    if event_type == ChangeKind.BOOKMARK:
                        resource_version = rv or resource_version
                        continue
                    try:
                        kind = ChangeKind(event_type)
                    except ValueError:
                        self._log.warning("watch_unknown_event_type", event_type=event_type)
                        continue

                    failures = 0
                    resource_version = rv or resource_version
                    yield WatchEvent(kind=kind, document=obj, resource_version=rv)
                else:
                    # A clean server-side timeout counts as a successful connection.
                    failures = 0
                    self._log.debug("watch_stream_ended", resource_version=resource_version)
            except ApiException as exc:
                if exc.status == _HTTP_GONE:
                    self._log.info("watch_resource_version_expired", resource_version=resource_version)
                    resource_version = None
                    continue
                if exc.status in _FATAL_STATUSES:
                    raise WatchError(f"watch of {self._ref} rejected: {exc.status} {exc.reason}", cause=exc) from exc
                failures = await self._backoff(failures, exc)
            except (aiohttp.ClientError, OSError, TimeoutError) as exc:
                failures = await self._backoff(failures, exc)

    async def _resolve(self) -> Any:
        """Look the kind up through API discovery."""
        try:
            return await self._client.resources.get(api_version=self._ref.api_version, kind=self._ref.kind)
        except ResourceNotFoundError as exc:
            raise WatchError(
                f"no resource kind {self._ref.kind!r} in API version {self._ref.api_version!r}",
                cause=exc,
            ) from exc
        except (ApiException, aiohttp.ClientError, OSError, TimeoutError) as exc:
            raise WatchError(f"API discovery failed for {self._ref}: {exc}", cause=exc) from exc

    def _namespace_for(self, resource: Any) -> str | None:
        if not getattr(resource, "namespaced", True):
            if self._ref.namespace:
                self._log.warning("namespace_ignored_for_cluster_scoped_kind", namespace=self._ref.namespace)
            return None
        return self._ref.namespace or self._default_namespace

    async def _backoff(self, failures: int, exc: BaseException) -> int:
        failures += 1
        if failures > self._config.max_retries:
            raise WatchError(
                f"watch of {self._ref} failed {failures} times in a row: {exc}",
                cause=exc,
            ) from exc
        delay = min(self._config.backoff_base * (2 ** (failures - 1)), self._config.backoff_max)
        self._log.warning(
            "watch_retry",
            attempt=failures,
            max_retries=self._config.max_retries,
            delay_seconds=delay,
            error=str(exc),
        )
        await self._sleep(delay)
        return failures


def _raw_object(event: dict[str, Any]) -> Document:
    raw = event.get("raw_object")
    if raw is not None:
        return raw
    obj = event.get("object")
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return obj


def _resource_version(obj: Document) -> str:
    if not isinstance(obj, dict):
        return ""
    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        return ""
    return str(metadata.get("resourceVersion") or "")


def _status_code(obj: Document) -> int | None:
    if isinstance(obj, dict) and isinstance(obj.get("code"), int):
        return obj["code"]
    return None


def _status_message(obj: Document) -> str:
    if isinstance(obj, dict):
        return str(obj.get("message") or obj.get("reason") or obj)
    return str(obj)
