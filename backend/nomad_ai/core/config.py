"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/nomad_ai/core/config.py
# Project root is: backend/nomad_ai/core/../../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class GenerationConfig(BaseModel):
    """generationConfig block of a generateContent request"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_k: Optional[int] = Field(default=None, ge=1, alias="topK")
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0, alias="topP")
    max_output_tokens: Optional[int] = Field(default=None, ge=1, alias="maxOutputTokens")

    def merged(self, overrides: Optional["GenerationConfig"]) -> "GenerationConfig":
        """Return a copy where every field set on overrides replaces ours"""
        if overrides is None:
            return self.model_copy()
        data = self.model_dump(by_alias=True, exclude_none=True)
        data.update(overrides.model_dump(by_alias=True, exclude_none=True))
        return GenerationConfig.model_validate(data)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "nomad-ai"
    app_env: str = Field(default="development", description="Application environment")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"nomad_ai.core": "DEBUG"})'
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/nomad_ai.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=7,
        ge=1,
        description="Number of days to keep log files"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Enable logging of sensitive data (API keys, tokens) - NOT RECOMMENDED"
    )

    # Gemini
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API key")
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language API"
    )
    gemini_model: str = Field(default="gemini-pro", description="Model used for generateContent")
    gemini_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (unset = no timeout, callers apply their own deadline)"
    )

    # Generation defaults, each overridable per call
    gemini_temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    gemini_top_k: int = Field(default=40, ge=1, description="Top-k sampling")
    gemini_top_p: float = Field(default=0.95, ge=0.0, le=1.0, description="Top-p sampling")
    gemini_max_output_tokens: int = Field(default=8192, ge=1, description="Maximum output tokens")

    @field_validator("gemini_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def has_gemini_credentials(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    @property
    def generation_defaults(self) -> GenerationConfig:
        """Default generation parameters for the gateway"""
        return GenerationConfig(
            temperature=self.gemini_temperature,
            top_k=self.gemini_top_k,
            top_p=self.gemini_top_p,
            max_output_tokens=self.gemini_max_output_tokens,
        )

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
