import os
from datetime import datetime


def fmt_timestamp(ts: int | float | None) -> str:
    """
    Format a unix timestamp for the "Last Scanned" column.
    Missing timestamps render as "Never".
    """
    if not ts:
        return "Never"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def display_name(path: str) -> str:
    # "/music/rock/" -> "rock"; a filesystem root keeps its full path
    name = os.path.basename(os.path.normpath(path))
    return name or path


def normalize_extensions(exts) -> set[str]:
    out: set[str] = set()
    for e in exts:
        e = str(e).strip().lower().lstrip(".")
        if e:
            out.add(e)
    return out
