"""
Step card renderer - Checklist step display.

Provides:
- Step card HTML with lock/available/completed styling
- Status indicators for compact lists
"""

import html

from regtracker.schemas import StepStatusBase
from regtracker.workflow import StepAvailability

from .certificate import format_timestamp


def get_step_css() -> str:
    """Get CSS styles for step cards."""
    return """
    <style>
    .step-card {
        background: white;
        border: 1px solid #e0e0e0;
        border-radius: 12px;
        padding: 1em 1.2em;
        margin: 0.5em 0;
    }
    .step-card.locked {
        opacity: 0.6;
    }
    .step-card.completed {
        border-left: 4px solid #388E3C;
    }
    .step-card.available {
        border-left: 4px solid #1976D2;
    }
    .step-title {
        font-size: 1.1em;
        font-weight: 600;
    }
    .step-location {
        color: #666;
        font-size: 0.9em;
        margin: 0.2em 0 0.6em 0;
    }
    .step-instructions {
        line-height: 1.5;
        font-size: 0.95em;
    }
    .step-footer {
        color: #888;
        font-size: 0.8em;
        margin-top: 0.6em;
    }
    </style>
    """


def get_status_indicator(availability: StepAvailability) -> str:
    """
    Get status indicator for compact display.

    Returns:
        ✓ for completed
        ○ for available
        ◌ for locked
    """
    if availability == StepAvailability.COMPLETED:
        return "✓"
    elif availability == StepAvailability.AVAILABLE:
        return "○"
    else:
        return "◌"


def render_step_card(step: StepStatusBase, availability: StepAvailability) -> str:
    """
    Render a checklist step card.

    Args:
        step: Pending or completed step
        availability: Availability computed from the student's step list

    Returns:
        HTML string for the card
    """
    parts = [f'<div class="step-card {availability.value}">']
    parts.append(
        f'<div class="step-title">{get_status_indicator(availability)} '
        f'{step.index}. {html.escape(step.title)}</div>'
    )
    parts.append(f'<div class="step-location"><b>Location:</b> {html.escape(step.location)}</div>')
    parts.append(f'<div class="step-instructions">{html.escape(step.instructions)}</div>')

    if step.completed:
        footer = f'Signed: <b>{html.escape(step.initials)}</b> • {format_timestamp(step.completed_at)}'
        if step.note:
            footer += f'<br>Note: {html.escape(step.note)}'
    elif availability == StepAvailability.LOCKED:
        footer = "Unlocks after completing the previous step."
    else:
        footer = "Awaiting staff sign-off"
    parts.append(f'<div class="step-footer">{footer}</div>')

    parts.append('</div>')
    return ''.join(parts)
