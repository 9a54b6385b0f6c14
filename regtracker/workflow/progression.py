"""
Step progression - The linear sign-off state machine.

Provides:
- Lock checking (step N unlocks once step N-1 is signed)
- Sign-off and full reset
- Percent complete and current step queries
- Step availability for display and the admin flow overview

Transitions return a new Student; inputs are never mutated.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence

from regtracker.errors import RegistrationValidationError
from regtracker.schemas import (
    STEP_COUNT,
    CompletedStep,
    StepStatus,
    Student,
    pending_steps,
)


INITIALS_MAX_LENGTH = 5


class StepAvailability(str, Enum):
    """Step availability status for UI display."""
    LOCKED = "locked"         # Previous step not signed
    AVAILABLE = "available"   # Awaiting staff sign-off
    COMPLETED = "completed"   # Signed


def _check_index(index: int):
    if not 1 <= index <= STEP_COUNT:
        raise RegistrationValidationError(
            f"Step index must be between 1 and {STEP_COUNT}, got {index}"
        )


# -------------------------------------------------------------------------
# Queries
# -------------------------------------------------------------------------

def is_locked(steps: Sequence[StepStatus], index: int) -> bool:
    """Step 1 is never locked; step i is locked until step i-1 is completed."""
    _check_index(index)
    if index == 1:
        return False
    return not steps[index - 2].completed


def step_availability(steps: Sequence[StepStatus], index: int) -> StepAvailability:
    """Availability of a single step for rendering."""
    _check_index(index)
    if steps[index - 1].completed:
        return StepAvailability.COMPLETED
    if is_locked(steps, index):
        return StepAvailability.LOCKED
    return StepAvailability.AVAILABLE


def percent_complete(student: Student) -> int:
    return round(100 * student.completed_count / STEP_COUNT)


def current_step_index(student: Student) -> int:
    """First pending step, or the last step once everything is signed."""
    for step in student.steps:
        if not step.completed:
            return step.index
    return STEP_COUNT


def is_complete(student: Student) -> bool:
    return student.completed_count == STEP_COUNT


def flow_counts(students: Iterable[Student]) -> list[int]:
    """
    Count how many students currently stand at each step.

    Returns:
        List of STEP_COUNT counts; fully registered students count at the last step.
    """
    counts = [0] * STEP_COUNT
    for student in students:
        counts[current_step_index(student) - 1] += 1
    return counts


# -------------------------------------------------------------------------
# Transitions
# -------------------------------------------------------------------------

def new_student(name: str, grade: Optional[str] = None, now: Optional[datetime] = None) -> Student:
    """
    Create a student with all steps pending.

    Raises:
        RegistrationValidationError: If the name is empty
    """
    name = (name or "").strip()
    if not name:
        raise RegistrationValidationError("Enter a student name.")
    grade = (grade or "").strip() or None
    return Student(
        id=uuid.uuid4().hex,
        name=name,
        grade=grade,
        created_at=now or datetime.now(),
        steps=pending_steps(),
    )


def sign_step(
    student: Student,
    index: int,
    initials: str,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Student:
    """
    Record a staff sign-off on a step.

    Re-signing an already completed step overwrites its initials, note and
    timestamp; the step stays completed.

    Args:
        student: Student to sign for (not modified)
        index: 1-based step index
        initials: Staff initials; trimmed, upper-cased, capped at INITIALS_MAX_LENGTH
        note: Optional free-text note; blank notes are dropped
        now: Completion time (default: current time)

    Returns:
        New Student with the step completed

    Raises:
        RegistrationValidationError: Index out of range, step locked, or initials empty
    """
    _check_index(index)
    if is_locked(student.steps, index):
        raise RegistrationValidationError(
            f"Step {index} is locked until step {index - 1} is signed."
        )
    initials = (initials or "").strip()
    if not initials:
        raise RegistrationValidationError("Enter staff initials before signing.")

    signed = CompletedStep(
        index=index,
        initials=initials[:INITIALS_MAX_LENGTH].upper(),
        note=(note or "").strip() or None,
        completed_at=now or datetime.now(),
    )
    steps = list(student.steps)
    steps[index - 1] = signed
    return student.model_copy(update={"steps": steps})


def reset_student(student: Student) -> Student:
    """Return the student with every step back to pending; identity fields are kept."""
    return student.model_copy(update={"steps": pending_steps()})
