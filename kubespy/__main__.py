"""Entry point for `python -m kubespy`.

Usage:
    python -m kubespy changes v1 Pod default/nginx
    python -m kubespy status apps/v1 Deployment my-app
"""

from __future__ import annotations

from kubespy.cli import cli

cli(prog_name="kubespy")
