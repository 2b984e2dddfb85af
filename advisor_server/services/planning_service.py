"""Financial planning calculators and personalised advice."""

from __future__ import annotations

from typing import Callable, TypeVar

from advisor_server.planning.models import (
    AdvisorProfile,
    CompoundInput,
    CompoundResult,
    GoalInput,
    GoalResult,
    RetirementInput,
    RetirementResult,
)
from advisor_server.planning.projections import project_compound, project_goal, project_retirement
from advisor_server.planning.validation import InvalidProjectionInput, require_valid, validate_advisor_profile
from advisor_server.services.advisory_service import AdvisoryReport, AdvisoryService
from advisor_server.services.base import ServiceResult, envelope_from_invalid_input, local_result

T = TypeVar("T")
CALCULATOR_SOURCE = "Local projection"


def _run_projection(call: Callable[[], T]) -> ServiceResult[T]:
    try:
        return local_result(call(), CALCULATOR_SOURCE)
    except InvalidProjectionInput as error:
        return ServiceResult(data=None, error=envelope_from_invalid_input(error))


class PlanningService:
    def __init__(self, advisory: AdvisoryService) -> None:
        self.advisory = advisory

    def retirement(self, data: RetirementInput) -> ServiceResult[RetirementResult]:
        return _run_projection(lambda: project_retirement(data))

    def goal(self, data: GoalInput) -> ServiceResult[GoalResult]:
        return _run_projection(lambda: project_goal(data))

    def compound(self, data: CompoundInput) -> ServiceResult[CompoundResult]:
        return _run_projection(lambda: project_compound(data))

    def personalized_advice(self, profile: AdvisorProfile) -> ServiceResult[AdvisoryReport]:
        try:
            require_valid(validate_advisor_profile(profile))
        except InvalidProjectionInput as error:
            return ServiceResult(data=None, error=envelope_from_invalid_input(error))
        return self.advisory.planning_advice(profile)
