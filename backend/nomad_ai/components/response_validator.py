"""
Response Validator component.

Role: check the gateway's output against the feature's contract and turn the outcome into
either a typed contract instance or a ResponseValidationError.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from pydantic import ValidationError

from nomad_ai.components.contracts import Feature, NomadContract, get_contract
from nomad_ai.core.errors import ResponseValidationError
from nomad_ai.core.gemini_client import GenerationResult, RawTextResult

logger = logging.getLogger(__name__)


def validate_payload(feature: Union[Feature, str], payload: Any) -> NomadContract:
    """Validate an already-parsed JSON value against the feature contract"""
    feature = Feature(feature)
    contract = get_contract(feature)
    try:
        return contract.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        logger.warning(
            f"{feature.value} response failed validation",
            extra={"feature": feature.value, "error_count": len(errors)}
        )
        raise ResponseValidationError(feature.value, errors, payload=payload) from e


def validate_response(feature: Union[Feature, str], result: GenerationResult) -> NomadContract:
    """
    Validate a gateway result

    Raw text never satisfies a contract; it is reported as a validation error that keeps
    the text available on ``raw_response``.
    """
    feature = Feature(feature)
    if isinstance(result, RawTextResult):
        try:
            return validate_payload(feature, result.to_payload())
        except ResponseValidationError as e:
            raise ResponseValidationError(
                feature.value,
                e.errors,
                payload=e.payload,
                raw_response=result.raw_response,
            ) from e
    return validate_payload(feature, result.data)
