"""
Nomad Assistant Service

Public entry points for the planner's generative features. Every operation follows the
same path: render the feature prompt from caller data, send it through the Gemini
gateway, validate the reply against the feature contract and return the typed result.

Operations share no mutable state, so they can run concurrently; the only await point is
the gateway's network call.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from nomad_ai.components.contracts import (
    AssistantResponse,
    BudgetAnalysis,
    CommunityRecommendation,
    ConflictAnalysis,
    CoworkingRecommendation,
    Feature,
    LegalResource,
    NomadContract,
    TimeZoneRecommendation,
)
from nomad_ai.components.prompt_repository import PromptRepository
from nomad_ai.components.response_validator import validate_response
from nomad_ai.core.gemini_client import GeminiClient, get_gemini_client
from nomad_ai.core.logging_config import LoggingConfig

logger = logging.getLogger(__name__)


class NomadAssistantService:
    """Validated generative calls, one method per feature"""

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        prompts: Optional[PromptRepository] = None,
    ):
        self.client = client or get_gemini_client()
        self.prompts = prompts or PromptRepository()

    async def run_feature(self, feature: Union[Feature, str], payload: Any, **generation_params) -> NomadContract:
        """
        Run one feature end to end

        Raises:
            GeminiUpstreamError: upstream failed or produced nothing
            ResponseValidationError: reply does not match the feature contract
            httpx.TransportError: network failure
        """
        feature = Feature(feature)
        prompt = self.prompts.render(feature, payload)

        with LoggingConfig.bound_context(feature=feature.value):
            logger.info(f"Running {feature.value}", extra={"prompt_chars": len(prompt)})
            result = await self.client.generate(
                prompt,
                context={"feature": feature.value},
                **generation_params
            )
            return validate_response(feature, result)

    async def analyze_calendar_conflicts(self, events: List[Dict[str, Any]]) -> ConflictAnalysis:
        return await self.run_feature(Feature.CALENDAR_CONFLICTS, events)

    async def get_coworking_recommendations(self, preferences: Any) -> CoworkingRecommendation:
        return await self.run_feature(Feature.COWORKING, preferences)

    async def get_time_zone_recommendations(self, team_info: Any) -> TimeZoneRecommendation:
        return await self.run_feature(Feature.TIME_ZONES, team_info)

    async def analyze_budget(self, expense_data: Any) -> BudgetAnalysis:
        return await self.run_feature(Feature.BUDGET, expense_data)

    async def get_community_recommendations(self, user_profile: Any) -> CommunityRecommendation:
        return await self.run_feature(Feature.COMMUNITY, user_profile)

    async def get_legal_resources(self, query: Union[Mapping[str, Any], str]) -> LegalResource:
        """query is {"question": ...} or the question itself"""
        return await self.run_feature(Feature.LEGAL, query)

    async def get_assistant_response(self, query: str) -> AssistantResponse:
        return await self.run_feature(Feature.ASSISTANT, query)


# Global service instance
_nomad_assistant_service: Optional[NomadAssistantService] = None


def get_nomad_assistant_service() -> NomadAssistantService:
    """Get global service instance"""
    global _nomad_assistant_service
    if _nomad_assistant_service is None:
        _nomad_assistant_service = NomadAssistantService()
    return _nomad_assistant_service
