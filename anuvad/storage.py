from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def write_bytes_atomic(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_bytes(content)
    tmp.replace(path)


def write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding='utf-8')
    tmp.replace(path)


def read_text_input(path: str) -> str:
    """Read UTF-8 text from ``path``, or from stdin when ``path`` is ``-``."""
    if path == '-':
        return sys.stdin.read()
    return Path(path).expanduser().read_text(encoding='utf-8')
