"""
Roster views - Student list filtering and tabular summaries.
"""

import re

import pandas as pd

from regtracker.schemas import STEP_CATALOG, Student
from regtracker.workflow import current_step_index, flow_counts, percent_complete


ROSTER_COLUMNS = ["id", "name", "grade", "percent_complete", "current_step", "created_at"]

# characters Streamlit renders as markdown, LaTeX or emoji shortcodes in labels
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$:])")


def escape_markdown(text: str) -> str:
    """Backslash-escape markdown syntax so user text renders literally."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def filter_students(students: list[Student], search_query: str) -> list[Student]:
    """
    Filter students by search query.

    Searches in: name, grade
    """
    if not search_query or not search_query.strip():
        return students

    query = search_query.strip().lower()
    return [
        s for s in students
        if query in s.name.lower() or query in (s.grade or "").lower()
    ]


def students_to_frame(students: list[Student]) -> pd.DataFrame:
    """One row per student with progress columns."""
    rows = [
        {
            "id": s.id,
            "name": s.name,
            "grade": s.grade or "",
            "percent_complete": percent_complete(s),
            "current_step": current_step_index(s),
            "created_at": s.created_at,
        }
        for s in students
    ]
    return pd.DataFrame(rows, columns=ROSTER_COLUMNS)


def flow_frame(students: list[Student]) -> pd.DataFrame:
    """Students currently at each step, indexed by step title."""
    counts = flow_counts(students)
    return pd.DataFrame(
        {
            "step": [d.index for d in STEP_CATALOG],
            "title": [d.title for d in STEP_CATALOG],
            "students": counts,
        }
    ).set_index("title")
