"""
Registration workflow - Runtime components for tracking student sign-offs.

This module provides:
- progression: the linear step sign-off state machine
- StudentStore: device-local roster persistence
- StaffAccess: shared-PIN staff mode
"""

from .progression import (
    INITIALS_MAX_LENGTH,
    StepAvailability,
    is_locked,
    step_availability,
    percent_complete,
    current_step_index,
    is_complete,
    flow_counts,
    new_student,
    sign_step,
    reset_student,
)

from .store import (
    LocalStorage,
    StudentStore,
    encode_students,
    decode_students,
    load_students,
    save_students,
    DEFAULT_STORAGE_DIR,
    DEFAULT_STORAGE_DB,
    STUDENTS_KEY,
    PIN_KEY,
)

from .staff import (
    StaffAccess,
    DEFAULT_STAFF_PIN,
    MIN_PIN_LENGTH,
)

__all__ = [
    # Progression
    "INITIALS_MAX_LENGTH",
    "StepAvailability",
    "is_locked",
    "step_availability",
    "percent_complete",
    "current_step_index",
    "is_complete",
    "flow_counts",
    "new_student",
    "sign_step",
    "reset_student",
    # Store
    "LocalStorage",
    "StudentStore",
    "encode_students",
    "decode_students",
    "load_students",
    "save_students",
    "DEFAULT_STORAGE_DIR",
    "DEFAULT_STORAGE_DB",
    "STUDENTS_KEY",
    "PIN_KEY",
    # Staff
    "StaffAccess",
    "DEFAULT_STAFF_PIN",
    "MIN_PIN_LENGTH",
]
