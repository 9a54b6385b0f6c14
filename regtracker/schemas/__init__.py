"""
Registration tracker schemas - Pydantic models for the checklist workflow.

This module exports:
- Catalog: the fixed 7-step registration checklist
- Progress: per-step status variants and the student record
"""

# Catalog schemas
from .catalog import (
    StepDefinition,
    STEP_CATALOG,
    STEP_COUNT,
    get_step_definition,
)

# Progress schemas
from .progress import (
    StepStatusBase,
    PendingStep,
    CompletedStep,
    StepStatus,
    Student,
    pending_steps,
)

__all__ = [
    # Catalog
    'StepDefinition',
    'STEP_CATALOG',
    'STEP_COUNT',
    'get_step_definition',
    # Progress
    'StepStatusBase',
    'PendingStep',
    'CompletedStep',
    'StepStatus',
    'Student',
    'pending_steps',
]
