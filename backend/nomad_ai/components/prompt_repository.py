"""
File-backed prompt repository.

One Jinja2 template per feature lives in nomad_ai/prompts/<feature>.j2. Rendering is
deterministic: the same payload always yields the same prompt string.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from nomad_ai.components.contracts import Feature


def serialize_payload(payload: Any) -> str:
    """Pretty JSON of caller data, embedded verbatim in prompts"""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


class PromptRepository:
    def __init__(self, prompts_root: Optional[Path] = None):
        # Default: backend/nomad_ai/prompts
        if prompts_root is None:
            prompts_root = Path(__file__).resolve().parents[1] / "prompts"
        self.prompts_root = prompts_root
        self.env = Environment(
            loader=FileSystemLoader(str(prompts_root)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def template_name(self, feature: Union[Feature, str]) -> str:
        return f"{Feature(feature).value}.j2"

    def render(self, feature: Union[Feature, str], payload: Any) -> str:
        """Render the prompt for a feature from caller data"""
        feature = Feature(feature)
        template = self.env.get_template(self.template_name(feature))

        if feature is Feature.LEGAL:
            return template.render(question=self._question(payload))
        if feature is Feature.ASSISTANT:
            return template.render(query=payload if isinstance(payload, str) else serialize_payload(payload))
        return template.render(payload=serialize_payload(payload))

    @staticmethod
    def _question(query: Any) -> str:
        if isinstance(query, Mapping):
            query = query.get("question", "")
        if isinstance(query, str):
            return query
        # null, numbers and booleans render as their JSON literals
        return json.dumps(query, ensure_ascii=False, default=str)
