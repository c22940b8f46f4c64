"""
Pytest configuration and fixtures
"""
import copy
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from nomad_ai.components.prompt_repository import PromptRepository
from nomad_ai.core.config import Settings
from nomad_ai.core.gemini_client import GeminiClient
from nomad_ai.services.nomad_assistant_service import NomadAssistantService


VALID_PAYLOADS = {
    "calendar_conflicts": {
        "hasConflict": True,
        "conflictDetails": "Client call overlaps with the flight to Lisbon",
        "suggestedSolutions": [
            {"description": "Move call to 11:00", "pros": ["No disruption"], "cons": ["Later start"]},
        ],
    },
    "coworking": {
        "recommendations": [
            {
                "name": "Second Home",
                "location": "Mercado da Ribeira, Lisbon",
                "rating": "4.7",
                "price": "€250/month",
                "internetSpeed": "500 Mbps",
                "amenities": ["Phone booths", "Café"],
                "matchingCriteria": ["Fast internet", "Quiet zones"],
                "potentialDrawbacks": ["Busy at lunch"],
                "rank": 1,
            },
            {
                "name": "Heden",
                "location": "Santa Apolónia, Lisbon",
                "price": "€180/month",
                "amenities": ["Terrace"],
                "matchingCriteria": ["Budget"],
                "potentialDrawbacks": ["Slower Wi-Fi"],
                "rank": 2,
            },
        ],
        "recommendationSummary": "Second Home fits best for video calls.",
    },
    "time_zones": {
        "optimalMeetingTimes": [
            {
                "startTime": "2024-03-01T15:00:00Z",
                "endTime": "2024-03-01T16:00:00Z",
                "impactAssessment": [
                    {"location": "Lisbon", "localTime": "15:00", "impact": "Optimal"},
                    {"location": "San Francisco", "localTime": "07:00", "impact": "Challenging"},
                ],
                "reasoning": "Only slot inside everyone's waking hours.",
            }
        ],
        "jetlagManagementTips": ["Get morning light on arrival"],
    },
    "budget": {
        "categorizedExpenses": [
            {"category": "Coworking", "amount": 250, "percentage": 20.5, "workRelated": True},
            {"category": "Rent", "amount": 970.0, "percentage": 79.5, "workRelated": False},
        ],
        "comparisonToAverage": {"status": "Below average", "details": "Rent is below the Lisbon median."},
        "recommendations": [
            {"description": "Switch to a day pass", "potentialSavings": 60, "implementationDifficulty": "Easy"},
            {"description": "Negotiate a longer lease", "implementationDifficulty": "Hard"},
        ],
    },
    "community": {
        "recommendations": [
            {
                "name": "Lisbon Digital Nomads",
                "type": "Community",
                "relevanceScore": 9,
                "description": "Weekly meetups for remote workers.",
                "contactMethod": "meetup.com",
                "matchingInterests": ["Remote work", "Surfing"],
                "networkingApproach": "Join the Thursday coffee meetup.",
            }
        ]
    },
    "legal": {
        "visaRequirements": {
            "requiredVisa": "D8 Digital Nomad Visa",
            "stayDuration": "1 year, renewable",
            "applicationProcess": "Apply at the consulate",
            "requiredDocuments": ["Passport", "Proof of income"],
            "processingTime": "60 days",
            "fees": "€90",
        },
        "workLegality": {"legalStatus": "Permitted for foreign employers"},
        "authoritativeSources": [
            {"name": "AIMA", "url": "https://aima.gov.pt", "description": "Immigration agency"},
            {"name": "Local consulate", "description": "Visa applications"},
        ],
        "disclaimer": "General information, not legal advice.",
    },
    "assistant": {
        "response": "Book coworking near your accommodation.",
        "relatedModules": ["coworking"],
    },
}

REQUIRED_FIELD = {
    "calendar_conflicts": "hasConflict",
    "coworking": "recommendationSummary",
    "time_zones": "optimalMeetingTimes",
    "budget": "comparisonToAverage",
    "community": "recommendations",
    "legal": "disclaimer",
    "assistant": "response",
}


def gemini_reply(text, status_code=200):
    """generateContent response with a single candidate carrying text"""
    return httpx.Response(
        status_code,
        json={"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]},
    )


class GeminiStub:
    """Upstream stand-in: records requests and answers with a fixed response"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    @property
    def call_count(self):
        return len(self.requests)

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)

    def reply_text(self, text):
        self.response = gemini_reply(text)

    def reply_json(self, data):
        self.reply_text(json.dumps(data))

    def handler(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    return Settings(_env_file=None, gemini_api_key="test-key", gemini_model="gemini-pro")


@pytest.fixture
def make_gemini_stub():
    """Factory for extra stubs, for tests that build their own client"""
    def _make(response=None, error=None):
        return GeminiStub(
            response=response if response is not None else gemini_reply("{}"),
            error=error,
        )
    return _make


@pytest.fixture
def gemini_response():
    """Builder for generateContent responses carrying one candidate"""
    return gemini_reply


@pytest.fixture
def gemini_stub(make_gemini_stub):
    return make_gemini_stub()


@pytest.fixture
def gemini_client(settings, gemini_stub):
    return GeminiClient(settings=settings, transport=gemini_stub.transport)


@pytest.fixture
def service(gemini_client):
    return NomadAssistantService(client=gemini_client, prompts=PromptRepository())


@pytest.fixture
def valid_payloads():
    return copy.deepcopy(VALID_PAYLOADS)


@pytest.fixture
def required_fields():
    return dict(REQUIRED_FIELD)
