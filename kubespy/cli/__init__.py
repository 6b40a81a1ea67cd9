"""kubespy command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kubespy`` script).
"""

from kubespy.cli.main import cli

__all__ = ["cli"]
