"""JSON file writing shared by the word stores."""

import json
import os
import tempfile


def write_json_atomic(path: str, data) -> None:
    """Write JSON to a temp file beside `path`, then rename it over `path`.

    Readers see either the old file or the new one, never a partial write.
    Raises OSError if the file cannot be written.
    """
    directory = os.path.dirname(path) or '.'
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f'.{os.path.basename(path)}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
