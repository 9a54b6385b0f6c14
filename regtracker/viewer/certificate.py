"""
Certificate renderer - Printable registration status certificate.

Provides:
- Certificate HTML for embedding in the app
- Standalone printable HTML document for download
- Timestamp formatting shared by the other renderers
"""

import html
import re
from datetime import datetime
from typing import Optional

from regtracker.schemas import Student
from regtracker.workflow import is_complete, percent_complete


EMPTY_CELL = "—"


def format_timestamp(dt: Optional[datetime]) -> str:
    """Format a timestamp for display, or an em dash when absent."""
    if dt is None:
        return EMPTY_CELL
    return dt.strftime("%Y-%m-%d %I:%M %p")


def get_certificate_css() -> str:
    """Get CSS styles for certificate display."""
    return """
    <style>
    .certificate {
        background: white;
        border: 2px dashed #bdbdbd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
    }
    .certificate-title {
        font-size: 1.3em;
        font-weight: 700;
        color: #1565C0;
        margin-bottom: 0.2em;
    }
    .certificate-subtitle {
        color: #888;
        font-size: 0.9em;
        margin-bottom: 1em;
    }
    .certificate-student {
        font-size: 1.15em;
        font-weight: 600;
    }
    .certificate-meta {
        color: #666;
        font-size: 0.85em;
    }
    .certificate-badge {
        display: inline-block;
        padding: 0.2em 0.7em;
        border-radius: 999px;
        font-size: 0.85em;
        font-weight: 600;
        background: #eeeeee;
        color: #424242;
        margin-top: 0.5em;
    }
    .certificate-badge.done {
        background: #388E3C;
        color: white;
    }
    .certificate-table {
        width: 100%;
        border-collapse: collapse;
        margin-top: 1em;
        font-size: 0.9em;
    }
    .certificate-table th, .certificate-table td {
        text-align: left;
        padding: 0.4em 0.6em;
        border-bottom: 1px solid #eee;
    }
    .certificate-table th {
        color: #888;
        font-weight: 500;
    }
    .status-completed {
        color: #388E3C;
        font-weight: 600;
    }
    .status-pending {
        color: #999;
    }
    @media print {
        .certificate { border: none; }
    }
    </style>
    """


def render_certificate(student: Student) -> str:
    """
    Render the registration status certificate.

    Args:
        student: Student to summarize

    Returns:
        HTML string for the certificate
    """
    pct = percent_complete(student)
    badge_class = "certificate-badge done" if is_complete(student) else "certificate-badge"

    parts = ['<div class="certificate">']
    parts.append('<div class="certificate-title">Registration Status Certificate</div>')
    parts.append('<div class="certificate-subtitle">Show or print this page as proof of completion.</div>')

    parts.append(f'<div class="certificate-student">{html.escape(student.display_name)}</div>')
    parts.append(f'<div class="certificate-meta">Created: {format_timestamp(student.created_at)}</div>')
    parts.append(f'<span class="{badge_class}">{pct}% Complete</span>')

    parts.append('<table class="certificate-table">')
    parts.append(
        '<tr><th>Step</th><th>Location</th><th>Status</th>'
        '<th>Initials</th><th>Timestamp</th></tr>'
    )
    for step in student.steps:
        if step.completed:
            status = '<span class="status-completed">Completed</span>'
            initials = html.escape(step.initials)
            signed_at = format_timestamp(step.completed_at)
        else:
            status = '<span class="status-pending">Pending</span>'
            initials = EMPTY_CELL
            signed_at = EMPTY_CELL
        parts.append(
            f'<tr><td>{step.index}. {html.escape(step.title)}</td>'
            f'<td>{html.escape(step.location)}</td>'
            f'<td>{status}</td><td>{initials}</td><td>{signed_at}</td></tr>'
        )
    parts.append('</table>')

    parts.append('</div>')
    return ''.join(parts)


def render_certificate_document(student: Student) -> str:
    """Standalone HTML page for the certificate, ready for the browser's print dialog."""
    title = f"Registration Certificate - {student.name}"
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f'<title>{html.escape(title)}</title>'
        f'{get_certificate_css()}'
        '</head><body onload="window.print()">'
        f'{render_certificate(student)}'
        '</body></html>'
    )


def certificate_filename(student: Student) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", student.name.lower()).strip("-") or "student"
    return f"registration-certificate-{slug}.html"
