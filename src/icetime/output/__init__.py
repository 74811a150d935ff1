"""Storage-table projection of processed matches."""

from icetime.output.frames import concat_frames, to_frames
from icetime.output.rows import TABLES, Row, project_rows

__all__ = [
    "TABLES",
    "Row",
    "concat_frames",
    "project_rows",
    "to_frames",
]
