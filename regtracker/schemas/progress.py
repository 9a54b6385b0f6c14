"""
Progress schemas for the registration tracker.

Defines Pydantic models for:
- Per-step status as a tagged variant (pending vs completed)
- Student record with its ordered 7-step checklist
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .catalog import STEP_COUNT, StepDefinition, get_step_definition


# -----------------------------------------------------------------------------
# Step status variants
# -----------------------------------------------------------------------------

class StepStatusBase(BaseModel):
    status: str
    index: int = Field(..., ge=1, le=STEP_COUNT)

    @property
    def definition(self) -> StepDefinition:
        return get_step_definition(self.index)

    @property
    def title(self) -> str:
        return self.definition.title

    @property
    def location(self) -> str:
        return self.definition.location

    @property
    def instructions(self) -> str:
        return self.definition.instructions

    @property
    def completed(self) -> bool:
        return False


class PendingStep(StepStatusBase):
    """Step awaiting staff sign-off. Carries no sign-off fields."""
    status: Literal["pending"] = "pending"


class CompletedStep(StepStatusBase):
    """Step signed off by staff."""
    status: Literal["completed"] = "completed"
    initials: str = Field(..., min_length=1)
    note: Optional[str] = None
    completed_at: datetime

    @field_validator('initials')
    @classmethod
    def initials_not_blank(cls, v):
        if not v.strip():
            raise ValueError('initials must not be blank')
        return v

    @property
    def completed(self) -> bool:
        return True


StepStatus = Annotated[
    Union[PendingStep, CompletedStep],
    Field(discriminator="status"),
]


def pending_steps() -> list[PendingStep]:
    """Fresh checklist: one pending step per catalog entry."""
    return [PendingStep(index=i) for i in range(1, STEP_COUNT + 1)]


# -----------------------------------------------------------------------------
# Student
# -----------------------------------------------------------------------------

class Student(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    grade: Optional[str] = None
    created_at: datetime
    steps: list[StepStatus] = Field(default_factory=pending_steps)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError('name must not be blank')
        return v

    @model_validator(mode='after')
    def steps_match_catalog(self):
        indices = [step.index for step in self.steps]
        if indices != list(range(1, STEP_COUNT + 1)):
            raise ValueError(
                f'steps must cover indices 1..{STEP_COUNT} in order, got {indices}'
            )
        # signed steps form a prefix of the checklist
        for earlier, later in zip(self.steps, self.steps[1:]):
            if later.completed and not earlier.completed:
                raise ValueError(
                    f'step {later.index} is completed but step {earlier.index} is not'
                )
        return self

    @property
    def completed_count(self) -> int:
        return sum(1 for step in self.steps if step.completed)

    @property
    def display_name(self) -> str:
        """Name with grade suffix, as shown on cards and the certificate."""
        return f"{self.name} • Grade {self.grade}" if self.grade else self.name
