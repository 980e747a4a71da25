"""AI classification provider backed by the Anthropic Messages API.

The provider only moves text: it sends the classifier's prompt and returns
the JSON object found in the answer. Deciding what the JSON means is the
classifier's job.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import anthropic

from climapermit.config import DEFAULT_AI_MODEL
from climapermit.exceptions import AiClassificationError, AiResponseFormatError

logger = logging.getLogger(__name__)


class ClassificationProvider(Protocol):
    """Answers a structured classification prompt with a JSON object."""

    def classify(self, prompt: str) -> dict[str, Any]: ...


_SYSTEM_PROMPT = (
    "You are an expert in HVAC permitting for the Tampa Bay region of "
    "Florida (Hillsborough, Pasco, and Pinellas counties).\n\n"
    "You classify HVAC jobs into permit categories. Answer with a single "
    "JSON object and nothing else. Do not wrap it in prose."
)


class AnthropicClassificationProvider:
    """Sends classification prompts to Claude."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_AI_MODEL,
        timeout: float = 30.0,
        client: anthropic.Anthropic | None = None,
    ) -> None:
        self._client = client or anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model

    def classify(self, prompt: str) -> dict[str, Any]:
        """Return the JSON object in Claude's answer.

        Raises:
            AiClassificationError: The API call failed or timed out.
            AiResponseFormatError: The answer held no parseable JSON object.
        """
        raw_response = self._call_api(prompt)
        json_str = _extract_json(raw_response)
        if json_str is None:
            msg = "No JSON object found in AI classification response"
            raise AiResponseFormatError(msg)
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            msg = "Invalid JSON in AI classification response"
            raise AiResponseFormatError(msg) from exc
        if not isinstance(data, dict):
            msg = "AI classification response is not a JSON object"
            raise AiResponseFormatError(msg)
        return data

    def _call_api(self, prompt: str) -> str:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=1024,
                system=_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            raise AiClassificationError(f"AI classification call failed: {exc}") from exc
        text_blocks = [
            block.text for block in response.content if block.type == "text"
        ]
        return "\n".join(text_blocks)


def _extract_json(text: str) -> str | None:
    """Extract JSON from ```json fences, plain fences, or the outermost braces."""
    start = text.find("```json")
    if start != -1:
        start += 7
    else:
        start = text.find("```")
        if start != -1:
            start += 3
    if start != -1:
        end = text.find("```", start)
        if end == -1:
            return None
        return text[start:end].strip()

    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last <= first:
        return None
    return text[first : last + 1]
