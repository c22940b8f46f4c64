"""
Error taxonomy for generative calls.

Three causes are kept apart so callers can tell "not configured" from "service failed"
from "service answered with something we can't use". Network failures are not wrapped:
httpx transport exceptions reach the caller as raised.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    """Error categories for classification"""
    CONFIGURATION = "configuration"  # Missing credential, fatal
    UPSTREAM = "upstream"  # Non-success status or empty/malformed reply
    VALIDATION = "validation"  # Reply parsed but does not match the contract


class NomadAIError(Exception):
    """Base class for all errors raised by nomad_ai"""

    category: ErrorCategory = ErrorCategory.UPSTREAM

    def __init__(self, message: str, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "message": self.message,
            "error_type": type(self).__name__,
            "category": self.category.value,
            "metadata": self.metadata,
        }


class GeminiConfigurationError(NomadAIError):
    """Gateway cannot be used as configured (e.g. no API key)"""

    category = ErrorCategory.CONFIGURATION


class GeminiUpstreamError(NomadAIError):
    """Upstream answered with a non-success status or produced no usable candidate"""

    category = ErrorCategory.UPSTREAM

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, metadata)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        data["body"] = self.body
        return data


class ResponseValidationError(NomadAIError):
    """Generated output does not satisfy the feature's response contract"""

    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        feature: str,
        errors: List[Dict[str, Any]],
        payload: Any = None,
        raw_response: Optional[str] = None,
    ):
        if raw_response is not None:
            message = f"{feature}: model returned unstructured text instead of JSON"
        else:
            message = f"{feature}: response failed validation ({len(errors)} error(s))"
        super().__init__(message, metadata={"feature": feature})
        self.feature = feature
        self.errors = errors
        self.payload = payload
        self.raw_response = raw_response

    @property
    def is_raw_text(self) -> bool:
        return self.raw_response is not None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        data["raw_response"] = self.raw_response
        return data
