"""
Response contracts for the planner's generative features.

Each feature has one contract describing the JSON the model is asked to return.
Field names on the wire are camelCase; attributes are snake_case. Primitive fields are
strict, so "5" is not accepted where a number is expected.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Text = Annotated[str, Field(strict=True)]
Flag = Annotated[bool, Field(strict=True)]
Number = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Feature(str, Enum):
    """Generative features exposed by the planner"""
    CALENDAR_CONFLICTS = "calendar_conflicts"
    COWORKING = "coworking"
    TIME_ZONES = "time_zones"
    BUDGET = "budget"
    COMMUNITY = "community"
    LEGAL = "legal"
    ASSISTANT = "assistant"


class NomadContract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Dump using wire names, leaving out optional fields that were not provided"""
        return self.model_dump(by_alias=True, exclude_none=True)


# Smart calendar

class SuggestedSolution(NomadContract):
    description: Text
    pros: List[Text]
    cons: List[Text]


class ConflictAnalysis(NomadContract):
    # conflict_details / suggested_solutions are only meaningful when has_conflict is set
    has_conflict: Flag
    conflict_details: Optional[Text] = None
    suggested_solutions: Optional[List[SuggestedSolution]] = None


# Co-working spaces

class CoworkingSpace(NomadContract):
    name: Text
    location: Text
    rating: Optional[Text] = None
    price: Text
    internet_speed: Optional[Text] = None
    amenities: List[Text]
    matching_criteria: List[Text]
    potential_drawbacks: List[Text]
    rank: Number = Field(ge=1, le=5)


class CoworkingRecommendation(NomadContract):
    recommendations: List[CoworkingSpace]
    recommendation_summary: Text


# Time zones

class ImpactAssessment(NomadContract):
    location: Text
    local_time: Text
    impact: Literal["Optimal", "Acceptable", "Challenging"]


class MeetingTime(NomadContract):
    start_time: Text  # ISO 8601
    end_time: Text  # ISO 8601
    impact_assessment: List[ImpactAssessment]
    reasoning: Text


class TimeZoneRecommendation(NomadContract):
    optimal_meeting_times: List[MeetingTime]
    jetlag_management_tips: Optional[List[Text]] = None


# Budget

class CategorizedExpense(NomadContract):
    category: Text
    amount: Number
    percentage: Number
    work_related: Flag


class AverageComparison(NomadContract):
    status: Literal["Above average", "Below average", "Average"]
    details: Text


class SavingsRecommendation(NomadContract):
    description: Text
    potential_savings: Optional[Number] = None
    implementation_difficulty: Literal["Easy", "Medium", "Hard"]


class BudgetAnalysis(NomadContract):
    categorized_expenses: List[CategorizedExpense]
    comparison_to_average: AverageComparison
    recommendations: List[SavingsRecommendation]


# Community

class CommunityMatch(NomadContract):
    name: Text
    type: Text  # "Event", "Group", "Community", ...
    relevance_score: Number = Field(ge=1, le=10)
    description: Text
    contact_method: Optional[Text] = None
    matching_interests: List[Text]
    networking_approach: Text


class CommunityRecommendation(NomadContract):
    recommendations: List[CommunityMatch]


# Legal

class VisaRequirements(NomadContract):
    required_visa: Text
    stay_duration: Text
    application_process: Text
    required_documents: List[Text]
    processing_time: Text
    fees: Text


class TaxImplications(NomadContract):
    tax_status: Text
    reporting_requirements: Text
    treaties_summary: Optional[Text] = None
    key_considerations: List[Text]


class WorkLegality(NomadContract):
    legal_status: Text
    restrictions: Optional[List[Text]] = None
    permissions: Optional[List[Text]] = None


class AuthoritativeSource(NomadContract):
    name: Text
    url: Optional[Text] = None
    description: Text


class LegalResource(NomadContract):
    visa_requirements: Optional[VisaRequirements] = None
    tax_implications: Optional[TaxImplications] = None
    work_legality: Optional[WorkLegality] = None
    authoritative_sources: List[AuthoritativeSource]
    disclaimer: Text


# General assistant

class AssistantResponse(NomadContract):
    response: Text
    related_modules: Optional[List[Text]] = None
    suggested_actions: Optional[List[Text]] = None


FEATURE_CONTRACTS: Dict[Feature, Type[NomadContract]] = {
    Feature.CALENDAR_CONFLICTS: ConflictAnalysis,
    Feature.COWORKING: CoworkingRecommendation,
    Feature.TIME_ZONES: TimeZoneRecommendation,
    Feature.BUDGET: BudgetAnalysis,
    Feature.COMMUNITY: CommunityRecommendation,
    Feature.LEGAL: LegalResource,
    Feature.ASSISTANT: AssistantResponse,
}


def get_contract(feature: Feature) -> Type[NomadContract]:
    return FEATURE_CONTRACTS[Feature(feature)]
