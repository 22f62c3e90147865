from __future__ import annotations

from pathlib import Path

"""Static sample file offered to operators as a starting template."""

__all__ = [
    "SAMPLE_CSV",
    "TEMPLATE_FILE_NAME",
    "write_template",
]

TEMPLATE_FILE_NAME = "orders_template.csv"

SAMPLE_CSV = """id,latitude,longitude,timestamp,subtotal,address
1,40.7580,-73.9855,2026-02-28T10:00:00Z,120,Manhattan NY
2,40.6782,-73.9442,2026-02-28T11:00:00Z,85,Brooklyn NY
3,42.6526,-73.7562,2026-02-28T12:00:00Z,250,Albany NY
"""


def write_template(path: Path) -> Path:
    """Write the sample CSV; a directory target gets the default file name."""
    if path.is_dir():
        path = path / TEMPLATE_FILE_NAME
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
