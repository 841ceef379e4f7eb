"""Deep get/set over the nested answers mapping.

Paths are dot separated; a trailing ``[n]`` on a segment is an extra segment,
so ``a.b[0].c`` and ``a.b.0.c`` address the same value.
"""

from __future__ import annotations

from typing import Any, List
import logging
import re

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"\[(\d+)\]")


def split_path(path: str) -> List[str]:
    """Return the segments of a dotted/bracketed path."""
    return _INDEX_RE.sub(r".\1", str(path or "")).split(".")


def _list_index(container: list, segment: str) -> int | None:
    if not segment.isdigit():
        return None
    idx = int(segment)
    return idx if idx < len(container) else None


def _addressable(container: Any, segment: str) -> bool:
    """True when ``segment`` can be written into ``container`` as it is.

    A list accepts an existing index or the index one past its end.
    """
    if isinstance(container, dict):
        return True
    if isinstance(container, list):
        return segment.isdigit() and int(segment) <= len(container)
    return False


def get_path(graph: Any, path: str, default: Any = None) -> Any:
    """Read the value at ``path``; ``default`` when any segment is absent.

    Never raises. Sequences are indexable with integer segments.
    """
    cur = graph
    for segment in split_path(path):
        if isinstance(cur, dict):
            if segment not in cur:
                return default
            cur = cur[segment]
        elif isinstance(cur, list):
            idx = _list_index(cur, segment)
            if idx is None:
                return default
            cur = cur[idx]
        else:
            return default
    return cur


def set_path(graph: dict, path: str, value: Any) -> None:
    """Write ``value`` at ``path``, creating intermediate mappings on demand.

    Lists are descended into with integer segments; an index equal to the
    list length appends. Any intermediate that cannot take the next segment
    (a scalar, or a list addressed by a name or an index past its end) is
    replaced by an empty mapping and a warning is logged; its previous value
    is lost. Never raises for a dict ``graph``.
    """
    segments = split_path(path)
    cur: Any = graph
    for i, segment in enumerate(segments):
        if isinstance(cur, list):
            key: Any = int(segment)
            if key == len(cur):
                cur.append(None)
        else:
            key = segment
        if i == len(segments) - 1:
            cur[key] = value
            return
        nxt = cur[key] if isinstance(cur, list) else cur.get(key)
        if not _addressable(nxt, segments[i + 1]):
            if nxt is not None:
                logger.warning("set_path_replaced_value path=%s segment=%s previous=%r", path, segment, nxt)
            nxt = {}
            cur[key] = nxt
        cur = nxt


__all__ = ["split_path", "get_path", "set_path"]
