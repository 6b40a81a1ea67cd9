"""Identifier of the single resource being spied on."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceRef:
    """API version, kind and ``[<namespace>/]<name>`` of one resource."""

    api_version: str
    kind: str
    name: str
    namespace: str | None = None

    @classmethod
    def parse(cls, api_version: str, kind: str, qualified_name: str) -> ResourceRef:
        """Build a ref from command-line style arguments.

        Raises:
            ValueError: a component is empty, or the name has more than one ``/``.
        """
        if not api_version.strip():
            raise ValueError("apiVersion must not be empty")
        if not kind.strip():
            raise ValueError("kind must not be empty")
        parts = qualified_name.split("/")
        if len(parts) > 2:
            raise ValueError(f"expected [<namespace>/]<name>, got {qualified_name!r}")
        if any(not part for part in parts):
            raise ValueError(f"empty namespace or name in {qualified_name!r}")
        if len(parts) == 2:
            return cls(api_version=api_version, kind=kind, name=parts[1], namespace=parts[0])
        return cls(api_version=api_version, kind=kind, name=parts[0])

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __str__(self) -> str:
        return f"{self.api_version} {self.kind} {self.qualified_name}"
