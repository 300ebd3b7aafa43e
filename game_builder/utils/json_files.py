import json
import os
from pathlib import Path


def write_json(filepath, data):
    """Write data as pretty-printed UTF-8 JSON, replacing the file in one step.

    The document lands under a temporary name first, so a concurrent reader
    sees either no file or the complete one. Non-ASCII text is kept as-is.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = filepath.with_name(filepath.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, filepath)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def read_bytes(filepath):
    """Return the raw contents of a file, or None if it is missing."""
    filepath = Path(filepath)
    if not filepath.is_file():
        return None
    return filepath.read_bytes()
