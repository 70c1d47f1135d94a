"""Plan catalog pass-through configuration."""

from pydantic import BaseModel, Field


class PlanCatalogConfig(BaseModel):
    """Static plan names used to label enrollments at creation time."""

    default_plan_name: str = Field(
        default="Health Savings Plan",
        min_length=1,
        description="Name used when a plan id has no catalog entry",
    )
    names: dict[str, str] = Field(
        default_factory=dict,
        description="Plan id to display name",
    )
