"""Resource watch subsystem.

Submodules
----------
resource -- ResourceRef: ``<apiVersion> <kind> [<namespace>/]<name>`` identifier.
watcher  -- ResourceWatcher: dynamic-client watch with resume, relist and back-off.
"""

from kubespy.watch.resource import ResourceRef
from kubespy.watch.watcher import ResourceWatcher

__all__ = ["ResourceRef", "ResourceWatcher"]
