"""kubespy command-line interface."""

from __future__ import annotations

import asyncio

import click

from kubespy import __version__
from kubespy.models.events import View
from kubespy.watch.resource import ResourceRef


@click.group(help="Spy on your Kubernetes resources.")
@click.version_option(__version__, prog_name="kubespy")
def cli() -> None:
    pass


@cli.command(
    "changes",
    short_help="Display changes made to a resource in real time.",
    help="Displays changes made to a Kubernetes resource in real time, as structural diffs.",
)
@click.argument("api_version", metavar="APIVERSION")
@click.argument("kind")
@click.argument("name", metavar="[NAMESPACE/]NAME")
def changes(api_version: str, kind: str, name: str) -> None:
    _spy(View.FULL, api_version, kind, name)


@cli.command(
    "status",
    short_help="Display changes to a resource's status in real time.",
    help="Displays changes to a Kubernetes resource's status in real time, as structural diffs.",
)
@click.argument("api_version", metavar="APIVERSION")
@click.argument("kind")
@click.argument("name", metavar="[NAMESPACE/]NAME")
def status(api_version: str, kind: str, name: str) -> None:
    _spy(View.STATUS, api_version, kind, name)


def _spy(view: View, api_version: str, kind: str, name: str) -> None:
    try:
        ref = ResourceRef.parse(api_version, kind, name)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="[NAMESPACE/]NAME") from exc
    _run(ref, view)


def _run(ref: ResourceRef, view: View) -> None:
    from kubespy.app import main

    asyncio.run(main(ref, view))
