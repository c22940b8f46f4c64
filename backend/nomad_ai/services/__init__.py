"""
Services module
"""
from nomad_ai.services.nomad_assistant_service import (
    NomadAssistantService,
    get_nomad_assistant_service,
)

__all__ = ["NomadAssistantService", "get_nomad_assistant_service"]
