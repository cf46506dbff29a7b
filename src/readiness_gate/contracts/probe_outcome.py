from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, computed_field

from readiness_gate.contracts.endpoint import EndpointDescriptor


class ProbeOutcome(BaseModel):
    """
    Final verdict of one endpoint prober.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: EndpointDescriptor
    healthy: bool


class FleetResult(BaseModel):
    """
    Aggregate of all prober outcomes, in the order the endpoints were given.

    The fleet verdict is derived from the outcomes and cannot be set directly.
    """

    model_config = ConfigDict(frozen=True)

    outcomes: Tuple[ProbeOutcome, ...] = ()

    @computed_field
    @property
    def all_healthy(self) -> bool:
        return all(outcome.healthy for outcome in self.outcomes)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ProbeOutcome]) -> "FleetResult":
        return cls(outcomes=tuple(outcomes))

    @property
    def unhealthy(self) -> Tuple[ProbeOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.healthy)
