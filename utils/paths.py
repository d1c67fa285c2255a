"""
Path accessor for nested intake snapshots.

Paths are dot-separated keys, each optionally followed by one bracketed
non-negative index: ``children[0].full_name``. Segments that do not match
that grammar are used verbatim as mapping keys.

Three entry points:
- ``resolve_path`` returns a tagged ``PathLookup`` so callers can tell a field
  that was never entered from one that was entered with the wrong shape.
- ``get_path`` collapses both of those to ``default`` (what the front-end sees).
- ``set_path`` returns a new snapshot; the input is never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, NamedTuple

PathSegment = str | int

_SEGMENT_RE = re.compile(r"^([A-Za-z0-9_]+)(?:\[(\d+)\])?$")


class LookupState(str, Enum):
    """Outcome of walking a path through a snapshot."""
    PRESENT = "present"
    MISSING = "missing"
    MALFORMED = "malformed"  # a non-container (or wrong container) sat where the path needed one


class PathLookup(NamedTuple):
    state: LookupState
    value: Any = None

    @property
    def present(self) -> bool:
        return self.state is LookupState.PRESENT


_MISSING = PathLookup(LookupState.MISSING)
_MALFORMED = PathLookup(LookupState.MALFORMED)


def parse_path(path: str) -> list[PathSegment]:
    """Split a path into mapping keys (str) and list indices (int)."""
    segments: list[PathSegment] = []
    for part in path.split("."):
        if not part:
            continue
        match = _SEGMENT_RE.match(part)
        if not match:
            segments.append(part)
            continue
        key, index = match.groups()
        segments.append(key)
        if index is not None:
            segments.append(int(index))
    return segments


def resolve_path(snapshot: Any, path: str) -> PathLookup:
    """Walk ``path`` and report whether the value is present, missing or malformed."""
    segments = parse_path(path)
    if not segments:
        return _MISSING

    current = snapshot
    for segment in segments:
        if current is None:
            return _MISSING
        if isinstance(segment, int):
            if not isinstance(current, list):
                return _MALFORMED
            if segment >= len(current):
                return _MISSING
            current = current[segment]
        else:
            if not isinstance(current, Mapping):
                return _MALFORMED
            if segment not in current:
                return _MISSING
            current = current[segment]

    if current is None:
        return _MISSING
    return PathLookup(LookupState.PRESENT, current)


def get_path(snapshot: Any, path: str, default: Any = None) -> Any:
    """Read a value; absent and wrongly-shaped paths both yield ``default``."""
    lookup = resolve_path(snapshot, path)
    return lookup.value if lookup.present else default


def _clone_container(value: Any, want_list: bool) -> dict[str, Any] | list[Any]:
    if want_list:
        return list(value) if isinstance(value, list) else []
    return dict(value) if isinstance(value, Mapping) else {}


def set_path(snapshot: Mapping[str, Any] | None, path: str, value: Any) -> dict[str, Any]:
    """
    Return a copy of ``snapshot`` with ``path`` set to ``value``.

    Containers along the path are shallow-cloned; missing ones are created and
    non-containers in the way are replaced. Lists are padded with ``None``.
    """
    segments = parse_path(path)
    root = dict(snapshot) if isinstance(snapshot, Mapping) else {}
    if not segments:
        return root

    cursor: dict[str, Any] | list[Any] = root
    for position, segment in enumerate(segments):
        is_last = position == len(segments) - 1
        if isinstance(cursor, list):
            # Index segments always follow a key, so the cursor kind matches the segment.
            while len(cursor) <= segment:  # type: ignore[operator]
                cursor.append(None)

        if is_last:
            cursor[segment] = value  # type: ignore[index]
            break

        existing = cursor.get(segment) if isinstance(cursor, dict) else cursor[segment]  # type: ignore[index]
        child = _clone_container(existing, want_list=isinstance(segments[position + 1], int))
        cursor[segment] = child  # type: ignore[index]
        cursor = child

    return root
