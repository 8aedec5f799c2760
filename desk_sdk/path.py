"""REST path mapping for Desk resources."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PathHandler:
    """Maps a resource's base path to its get/list/create/update paths.

    Paths are relative to the client base URL and carry no ``.json`` suffix;
    the service appends it.

    Attributes:
        base: Logical resource path, e.g. ``"tickets"``.
        create_path: Optional override for resources whose creation endpoint
            differs from the list endpoint (files are created at ``files/ref``).
    """

    base: str
    create_path: str | None = None

    def get(self, id: int) -> str:
        return f"{self.base}/{id}"

    def list(self) -> str:
        return self.base

    def create(self) -> str:
        return self.create_path if self.create_path is not None else self.base

    def update(self, id: int) -> str:
        return f"{self.base}/{id}"
