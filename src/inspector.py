"""Find the active log file and its rotated siblings by bucket."""

import os

from src.bucket import parse_bucket

ACTIVE = "active"


def list_log_files(log_path: str) -> list[tuple[str, str]]:
    """Return (filename, bucket) pairs, rotated files oldest first, active file last.

    Siblings whose suffix is not a bucket label are ignored.
    """
    log_dir = os.path.dirname(log_path) or "."
    base = os.path.basename(log_path)
    prefix = base + "."
    rotated = []
    active = []
    for name in os.listdir(log_dir):
        if name == base:
            active.append((name, ACTIVE))
        elif name.startswith(prefix):
            bucket = name[len(prefix):]
            if parse_bucket(bucket) is not None:
                rotated.append((name, bucket))
    rotated.sort(key=lambda item: item[1])
    return rotated + active


def path_for_bucket(log_path: str, bucket: str) -> str:
    if bucket == ACTIVE:
        return log_path
    return f"{log_path}.{bucket}"


def read_bucket(log_path: str, bucket: str) -> str:
    """Read the file holding a bucket's records, or the active file."""
    path = path_for_bucket(log_path, bucket)
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
