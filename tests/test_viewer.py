"""
Tests for certificate, step card and roster rendering.
"""

import pytest
from datetime import datetime

from regtracker.viewer import (
    ROSTER_COLUMNS,
    certificate_filename,
    escape_markdown,
    filter_students,
    flow_frame,
    format_timestamp,
    get_status_indicator,
    render_certificate,
    render_certificate_document,
    render_step_card,
    students_to_frame,
)
from regtracker.workflow import StepAvailability, new_student, sign_step, step_availability


@pytest.fixture
def student():
    s = new_student("Jordan <Smith>", "9", now=datetime(2025, 8, 1, 8, 0))
    return sign_step(s, 1, "ml", note="ID & form", now=datetime(2025, 8, 1, 9, 5))


class TestFormatting:

    def test_format_timestamp(self):
        assert format_timestamp(datetime(2025, 8, 1, 9, 5)) == "2025-08-01 09:05 AM"
        assert format_timestamp(datetime(2025, 8, 1, 14, 30)) == "2025-08-01 02:30 PM"

    def test_format_missing_timestamp(self):
        assert format_timestamp(None) == "—"

    def test_status_indicators(self):
        assert get_status_indicator(StepAvailability.COMPLETED) == "✓"
        assert get_status_indicator(StepAvailability.AVAILABLE) == "○"
        assert get_status_indicator(StepAvailability.LOCKED) == "◌"


class TestCertificate:

    def test_certificate_contents(self, student):
        out = render_certificate(student)
        assert "Registration Status Certificate" in out
        assert "Jordan &lt;Smith&gt; • Grade 9" in out
        assert "14% Complete" in out
        assert out.count("Completed</span>") == 1
        assert out.count("Pending</span>") == 6
        assert "ML" in out
        assert "2025-08-01 09:05 AM" in out
        assert "Registration Desk" in out

    def test_complete_badge(self, student):
        for i in range(2, 8):
            student = sign_step(student, i, "ML", now=datetime(2025, 8, 1, 10, 0))
        out = render_certificate(student)
        assert "certificate-badge done" in out
        assert "100% Complete" in out

    def test_document_is_standalone(self, student):
        doc = render_certificate_document(student)
        assert doc.startswith("<!DOCTYPE html>")
        assert "window.print()" in doc
        assert "<style>" in doc

    def test_filename(self, student):
        assert certificate_filename(student) == "registration-certificate-jordan-smith.html"


class TestStepCard:

    def test_completed_card(self, student):
        step = student.steps[0]
        out = render_step_card(step, step_availability(student.steps, 1))
        assert "step-card completed" in out
        assert "Signed: <b>ML</b>" in out
        assert "ID &amp; form" in out

    def test_available_and_locked_cards(self, student):
        available = render_step_card(student.steps[1], step_availability(student.steps, 2))
        locked = render_step_card(student.steps[2], step_availability(student.steps, 3))
        assert "Awaiting staff sign-off" in available
        assert "Unlocks after completing the previous step." in locked
        assert "3. Business Office" in locked


class TestRoster:

    def test_filter_students(self):
        students = [new_student("Ana Lee", "10"), new_student("Jordan Smith", "9")]
        assert filter_students(students, "") == students
        assert filter_students(students, "   ") == students
        assert [s.name for s in filter_students(students, "ANA")] == ["Ana Lee"]
        assert [s.name for s in filter_students(students, "9")] == ["Jordan Smith"]
        assert filter_students(students, "zzz") == []

    def test_students_to_frame(self, student):
        frame = students_to_frame([student, new_student("Ana Lee")])
        assert list(frame.columns) == ROSTER_COLUMNS
        assert frame["percent_complete"].tolist() == [14, 0]
        assert frame["current_step"].tolist() == [2, 1]
        assert frame["grade"].tolist() == ["9", ""]

    def test_empty_frame(self):
        frame = students_to_frame([])
        assert frame.empty
        assert list(frame.columns) == ROSTER_COLUMNS

    def test_flow_frame(self, student):
        frame = flow_frame([student, new_student("Ana Lee")])
        assert len(frame) == 7
        assert frame.loc["Sign In", "students"] == 1
        assert frame.loc["Admissions / Re-Admissions", "students"] == 1
        assert frame["students"].sum() == 2

    def test_escape_markdown(self):
        assert escape_markdown("Ana Lee") == "Ana Lee"
        assert escape_markdown("**Bold** [x](http://e.com)") == (
            r"\*\*Bold\*\* \[x\]\(http\://e\.com\)"
        )
        assert escape_markdown(r"a_b\c") == r"a\_b\\c"
        assert escape_markdown("$5 :smile:") == r"\$5 \:smile\:"
