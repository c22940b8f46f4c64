"""
Gemini generateContent client.

One prompt in, one request out: no caching, no retries, no streaming. The reply text of
the first candidate is parsed as JSON; text that is not JSON comes back as RawTextResult
instead of raising, since the model does not always follow formatting instructions.
"""
import json
import logging
from typing import Any, Dict, Literal, Optional, Union

import httpx
from pydantic import BaseModel

from nomad_ai.core.config import GenerationConfig, Settings, get_settings
from nomad_ai.core.errors import GeminiConfigurationError, GeminiUpstreamError

logger = logging.getLogger(__name__)


class StructuredResult(BaseModel):
    """Reply text parsed as JSON"""
    kind: Literal["structured"] = "structured"
    data: Any


class RawTextResult(BaseModel):
    """Reply text that could not be parsed as JSON"""
    kind: Literal["raw_text"] = "raw_text"
    raw_response: str

    def to_payload(self) -> Dict[str, str]:
        return {"rawResponse": self.raw_response}


GenerationResult = Union[StructuredResult, RawTextResult]


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_generated_text(text: str) -> GenerationResult:
    """Strict JSON parse of the candidate text, falling back to raw text

    NaN, Infinity and -Infinity are rejected like any other non-JSON token.
    """
    try:
        return StructuredResult(data=json.loads(text, parse_constant=_reject_constant))
    except (ValueError, TypeError):
        return RawTextResult(raw_response=text)


class GeminiClient:
    """
    Client for the Gemini generateContent endpoint

    The credential is checked when the client is built, so a misconfigured process
    fails at startup rather than on its first request.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        if not self.settings.has_gemini_credentials:
            raise GeminiConfigurationError(
                "Gemini API key not found. Please set the GEMINI_API_KEY environment variable."
            )
        self._api_key = self.settings.gemini_api_key.strip()
        self._transport = transport
        self.default_generation_config = self.settings.generation_defaults

    @property
    def model(self) -> str:
        return self.settings.gemini_model

    @property
    def endpoint(self) -> str:
        return f"{self.settings.gemini_api_base_url}/models/{self.model}:generateContent"

    def build_payload(
        self,
        prompt: str,
        generation_config: Optional[GenerationConfig] = None,
        **overrides
    ) -> Dict[str, Any]:
        """
        Build the request body

        Args:
            prompt: Prompt text
            generation_config: Parameters replacing the configured defaults
            **overrides: temperature, top_k, top_p, max_output_tokens or any other
                generationConfig key (passed verbatim)
        """
        config = self.default_generation_config.merged(generation_config)
        if overrides:
            config = config.merged(GenerationConfig(**overrides))

        return {
            "contents": [{
                "parts": [{"text": prompt}]
            }],
            "generationConfig": config.to_wire(),
        }

    async def generate(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None,
        generation_config: Optional[GenerationConfig] = None,
        **overrides
    ) -> GenerationResult:
        """
        Send one generateContent request

        Args:
            prompt: Prompt text
            context: Caller context, not sent upstream
            generation_config: Parameters replacing the configured defaults
            **overrides: Individual generation parameters

        Returns:
            StructuredResult or RawTextResult

        Raises:
            GeminiUpstreamError: non-success status, no candidates, or no text in the reply
            httpx.TransportError: network failure, unmodified
        """
        payload = self.build_payload(prompt, generation_config, **overrides)

        logger.debug(
            "Sending generateContent request",
            extra={"model": self.model, "prompt_chars": len(prompt)}
        )

        async with httpx.AsyncClient(
            timeout=self.settings.gemini_timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(
                self.endpoint,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )

        if not response.is_success:
            logger.error(
                f"Gemini API error: {response.status_code}",
                extra={"model": self.model, "status_code": response.status_code}
            )
            raise GeminiUpstreamError(
                f"Gemini API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        try:
            data = response.json()
        except ValueError:
            raise GeminiUpstreamError(
                "Gemini API returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            )

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            raise GeminiUpstreamError(
                "No response generated from Gemini API",
                status_code=response.status_code,
                body=response.text,
            )

        text = self._candidate_text(candidates[0])
        if text is None:
            raise GeminiUpstreamError(
                "First candidate has no text content",
                status_code=response.status_code,
                body=response.text,
            )

        result = parse_generated_text(text)
        if isinstance(result, RawTextResult):
            logger.warning(
                "Model reply is not valid JSON, returning raw text",
                extra={"model": self.model, "response_chars": len(text)}
            )
        return result

    @staticmethod
    def _candidate_text(candidate: Any) -> Optional[str]:
        """candidates[0].content.parts[0].text, or None if the shape is different"""
        try:
            text = candidate["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None


# Global client instance
_gemini_client: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """Get global Gemini client instance"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
