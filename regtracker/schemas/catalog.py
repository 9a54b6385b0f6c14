"""
Step catalog for the registration checklist.

The seven steps are fixed, shared by all students, and never persisted
per student.
"""

from pydantic import BaseModel, ConfigDict, Field


class StepDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1, le=7)
    title: str
    location: str
    instructions: str


STEP_CATALOG: tuple[StepDefinition, ...] = (
    StepDefinition(
        index=1,
        title="Sign In",
        location="Registration Desk",
        instructions="Sign in, receive your Steps Clearance Sheet and PROCEED TO STEP #2.",
    ),
    StepDefinition(
        index=2,
        title="Admissions / Re-Admissions",
        location="Room #202 (1st Floor)",
        instructions=(
            "Go to Room #202 to update/complete your Admissions/Re-Admissions Application. "
            "Receive initials and wait in Room #201 until directed to bring the Financial Form "
            "to STEP #3."
        ),
    ),
    StepDefinition(
        index=3,
        title="Business Office",
        location="Business Office",
        instructions="Make satisfactory financial arrangements in the Business Office. PROCEED TO STEP #4.",
    ),
    StepDefinition(
        index=4,
        title="Class Schedule",
        location="Chapel",
        instructions="In the Chapel, you will receive your completed class schedule. PROCEED TO STEP #5.",
    ),
    StepDefinition(
        index=5,
        title="Locker Assignment",
        location="Cafeteria",
        instructions="Obtain your locker assignment and lock. PROCEED TO STEP #6.",
    ),
    StepDefinition(
        index=6,
        title="iPad Information",
        location="Computer Lab",
        instructions="Receive your iPad information. PROCEED TO STEP #7.",
    ),
    StepDefinition(
        index=7,
        title="Student ID Scheduling",
        location="Computer Lab (Mr. Laborde)",
        instructions="Schedule the taking of your student ID with Mr. Laborde.",
    ),
)

STEP_COUNT = len(STEP_CATALOG)


def get_step_definition(index: int) -> StepDefinition:
    """Return the catalog entry for a 1-based step index."""
    if not 1 <= index <= STEP_COUNT:
        raise KeyError(f"No registration step with index {index}")
    return STEP_CATALOG[index - 1]
