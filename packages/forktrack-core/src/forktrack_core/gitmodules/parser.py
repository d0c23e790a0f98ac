"""Line-oriented reader for extended .gitmodules files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from forktrack_core.errors import ConfigNotFound
from forktrack_core.gitmodules.models import SubmoduleEntry

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r'^\[submodule\s+"([^"]+)"\]')
_KEY_VALUE_RE = re.compile(r"^(\w+)\s*=\s*(.*)$")
_KNOWN_KEYS = frozenset({"path", "url", "upstream"})


def parse_gitmodules(content: str) -> dict[str, SubmoduleEntry]:
    """Parse .gitmodules text into entries keyed by submodule name.

    Malformed lines, unknown keys, and keys outside a section are skipped.
    A repeated section header reuses the existing entry.
    """
    entries: dict[str, SubmoduleEntry] = {}
    current: SubmoduleEntry | None = None

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        section = _SECTION_RE.match(line)
        if section:
            name = section.group(1)
            current = entries.setdefault(name, SubmoduleEntry(name=name))
            continue

        kv = _KEY_VALUE_RE.match(line)
        if kv is None or current is None:
            continue
        key, value = kv.group(1), kv.group(2).strip()
        if key not in _KNOWN_KEYS or not value:
            continue
        setattr(current, key, value)

    return entries


def load_gitmodules(path: str | Path) -> dict[str, SubmoduleEntry]:
    """Read and parse a .gitmodules file. Raises ConfigNotFound if missing."""
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFound(path)
    entries = parse_gitmodules(path.read_text(encoding="utf-8"))
    logger.debug("Parsed %d submodule entries from %s", len(entries), path)
    return entries
