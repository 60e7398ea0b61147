"""JSON file helpers: parsing and atomic writes."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: str | Path) -> dict[str, Any]:
    """Read and parse JSON file.

    Args:
        path: Input file path

    Returns:
        Parsed JSON as dictionary
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data


def write_text_atomic(path: str | Path, content: str) -> None:
    """Write text via temp file + replace so readers never see a partial file.

    Args:
        path: Destination file path
        content: Text to write (UTF-8)
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path_obj.parent, prefix=f".{path_obj.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path_obj)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
