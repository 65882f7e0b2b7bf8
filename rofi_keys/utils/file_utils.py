"""Safe loading/saving helpers."""

import json
from pathlib import Path
from typing import Any


def load_json(path: str | Path) -> Any:
    """Parse a JSON file. Missing files and bad JSON propagate to the caller."""
    p = Path(path)
    return json.loads(p.read_text(encoding="utf-8"))


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_json_new(path: str | Path, data: Any) -> None:
    """Write JSON to a file that must not exist yet.

    Raises FileExistsError when something is already at ``path``.
    """
    with open(Path(path), "x", encoding="utf-8") as fh:
        fh.write(dump_json(data))
