"""Plan catalog pass-through.

The plan catalog itself lives in another service. The enrollment core
only needs a display name for a plan id at creation time.
"""

from abc import ABC, abstractmethod

from enrollment_bff.config.models.plans import PlanCatalogConfig


class PlanCatalog(ABC):
    """Abstract interface for resolving plan display names."""

    @abstractmethod
    async def resolve_plan_name(self, plan_id: str) -> str:
        """Get the display name for a plan id."""
        pass


class StaticPlanCatalog(PlanCatalog):
    """Plan catalog backed by a fixed id-to-name mapping."""

    def __init__(self, names: dict[str, str], default_name: str) -> None:
        self._names = dict(names)
        self._default_name = default_name

    @classmethod
    def from_config(cls, config: PlanCatalogConfig) -> "StaticPlanCatalog":
        return cls(names=config.names, default_name=config.default_plan_name)

    async def resolve_plan_name(self, plan_id: str) -> str:
        return self._names.get(plan_id, self._default_name)
