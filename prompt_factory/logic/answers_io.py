"""File helpers for answers and generated prompt text."""

from __future__ import annotations

from pathlib import Path
from typing import Any
import json


def write_text(path: Path | str, content: str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def write_json(path: Path | str, obj: Any) -> Path:
    return write_text(path, json.dumps(obj, indent=2, ensure_ascii=False))


def read_json(path: Path | str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


__all__ = ["write_text", "write_json", "read_json"]
