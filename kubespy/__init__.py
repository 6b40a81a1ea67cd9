"""kubespy: watch a single Kubernetes resource and print what changed."""

__version__ = "0.2.0"
