"""Registration tracker viewers: certificate, step cards and roster tables."""

from .certificate import (
    get_certificate_css,
    render_certificate,
    render_certificate_document,
    certificate_filename,
    format_timestamp,
)
from .steps import (
    get_step_css,
    get_status_indicator,
    render_step_card,
)
from .roster import (
    escape_markdown,
    filter_students,
    students_to_frame,
    flow_frame,
    ROSTER_COLUMNS,
)

__all__ = [
    # Certificate
    "get_certificate_css",
    "render_certificate",
    "render_certificate_document",
    "certificate_filename",
    "format_timestamp",
    # Steps
    "get_step_css",
    "get_status_indicator",
    "render_step_card",
    # Roster
    "escape_markdown",
    "filter_students",
    "students_to_frame",
    "flow_frame",
    "ROSTER_COLUMNS",
]
