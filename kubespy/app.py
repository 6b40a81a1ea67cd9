"""Application bootstrap for kubespy.

Wires components in dependency order and manages the asyncio lifecycle.
Startup order: config -> logging -> K8s client -> dynamic client -> watcher
              -> spy loop

Shutdown closes the API client; it is safe to call on an app that never
started or already stopped.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING, Any

import click

from kubespy.config import load_config
from kubespy.diff.render import DiffRenderer
from kubespy.errors import KubeSpyError, StartupError
from kubespy.models.config import KubeSpyConfig
from kubespy.models.events import View
from kubespy.observability.logging import get_logger, setup_logging
from kubespy.spy import Sink, SpyLoop
from kubespy.watch.resource import ResourceRef
from kubespy.watch.watcher import ResourceWatcher

if TYPE_CHECKING:
    import structlog


class SpyApp:
    """Application root for one ``changes`` or ``status`` run.

    ``stop()`` and ``request_stop()`` are idempotent.
    """

    def __init__(self, ref: ResourceRef, view: View, sink: Sink = click.echo) -> None:
        self.ref = ref
        self.view = view
        self.config: KubeSpyConfig | None = None

        self._sink = sink
        self._api_client: Any = None
        self._dynamic_client: Any = None
        self._watcher: ResourceWatcher | None = None
        self._renderer: DiffRenderer | None = None
        self._spy: SpyLoop | None = None

        self._running = False
        self._stop_requested = False
        self._log: structlog.stdlib.BoundLogger | None = None

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start all components in dependency order.

        Raises StartupError if a component cannot start.
        """
        # --- 1. Configuration -------------------------------------------
        try:
            self.config = load_config()
        except ValueError as exc:
            raise StartupError("config", exc) from exc

        # --- 2. Logging -------------------------------------------------
        setup_logging(self.config.log.level, self.config.log.format)
        self._log = get_logger("app").bind(view=str(self.view), resource=str(self.ref))
        self._log.info("kubespy starting", version=_kubespy_version())

        # --- 3. Kubernetes client ----------------------------------------
        await self._start_k8s_client()

        # --- 4. Dynamic client (API discovery) ---------------------------
        await self._start_dynamic_client()

        # --- 5. Watcher and spy loop -------------------------------------
        self._watcher = ResourceWatcher(
            self._dynamic_client,
            self.ref,
            config=self.config.watch,
            default_namespace=self.config.kube.default_namespace,
        )
        self._renderer = DiffRenderer(color=self.config.output.color, view=self.view)
        self._spy = SpyLoop(self.view, renderer=self._renderer, sink=self._sink)

        self._running = True
        self._log.info("kubespy started")

    async def _start_k8s_client(self) -> None:
        """Load in-cluster config, falling back to kubeconfig, and open an ApiClient."""
        assert self._log is not None
        assert self.config is not None
        self._log.debug("starting k8s client")
        try:
            import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
            from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

            context = self.config.kube.context or None
            if context is None:
                try:
                    k8s_config.load_incluster_config()
                    self._log.info("k8s client configured from in-cluster service account")
                except k8s_config.ConfigException:
                    await k8s_config.load_kube_config()
                    self._log.info("k8s client configured from kubeconfig")
            else:
                await k8s_config.load_kube_config(context=context)
                self._log.info("k8s client configured from kubeconfig", context=context)

            self._api_client = k8s_client.ApiClient()
        except Exception as exc:
            raise StartupError("k8s_client", exc) from exc

    async def _start_dynamic_client(self) -> None:
        assert self._log is not None
        self._log.debug("starting dynamic client")
        try:
            from kubernetes_asyncio.dynamic import DynamicClient  # type: ignore[import-untyped]

            self._dynamic_client = await DynamicClient(self._api_client)
        except Exception as exc:
            raise StartupError("dynamic_client", exc) from exc

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Print the banner and drive the spy loop until stopped or failed."""
        assert self._spy is not None
        assert self._watcher is not None
        assert self._renderer is not None
        if self._stop_requested:
            self._spy.stop()
        self._sink(self._renderer.banner(self.view, str(self.ref)))
        await self._spy.run(self._watcher.events())

    def request_stop(self) -> None:
        """Signal-safe: make the spy loop return at its next receive.

        A request that arrives before the loop exists is kept and applied
        when ``run()`` starts.
        """
        self._stop_requested = True
        if self._spy is not None:
            self._spy.stop()

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        if self._api_client is None:
            self._running = False
            return
        log = self._log or get_logger("app")
        self._running = False
        api_client, self._api_client = self._api_client, None
        self._dynamic_client = None
        try:
            await api_client.close()
        except Exception as exc:
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
        log.info("kubespy stopped")


def _kubespy_version() -> str:
    from kubespy import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main(ref: ResourceRef, view: View) -> None:
    """Run one spy session; SIGINT/SIGTERM stop it cleanly.

    Any fatal error is reported on stderr and turned into ``SystemExit(1)``.
    """
    app = SpyApp(ref, view)
    loop = asyncio.get_running_loop()

    signals = (signal.SIGTERM, signal.SIGINT)
    for sig in signals:
        loop.add_signal_handler(sig, app.request_stop)

    try:
        await app.start()
        await app.run()
    except StartupError as exc:
        _report_fatal(app, exc, "fatal startup error", component=exc.component)
        raise SystemExit(1) from exc
    except KubeSpyError as exc:
        _report_fatal(app, exc, "fatal error", stage=exc.stage)
        raise SystemExit(1) from exc
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)
        await app.stop()


def _report_fatal(app: SpyApp, exc: KubeSpyError, event: str, **context: str) -> None:
    if app._log is not None:
        app._log.critical(event, error=str(exc.cause or exc), **context)
    click.secho(f"error: {exc}", fg="red", err=True)
