"""Pydantic model for one extended .gitmodules entry."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SubmoduleEntry(BaseModel):
    """A `[submodule "name"]` block.

    `upstream` is a non-standard key; git itself ignores it.
    """

    name: str = Field(min_length=1)
    path: str | None = None
    url: str | None = None
    upstream: str | None = None

    def resolve_path(self, base_dir: str | Path) -> Path | None:
        """Working-tree directory, relative paths resolved against base_dir."""
        if not self.path:
            return None
        p = Path(self.path)
        if p.is_absolute():
            return p
        return Path(base_dir) / p
