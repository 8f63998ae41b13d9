"""Model clients for the city guide.

Gemini is the default provider: it supports structured output together with
Google Search grounding, so replies come back with the web sources they were
built from. The OpenAI Chat Completions client is kept as an alternative;
its URL citation annotations are reshaped into Gemini-style grounding
metadata so the normalizer sees a single format.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types
from openai import OpenAI

from viberoute.api.config import (
    get_gemini_api_key,
    get_gemini_model,
    get_llm_provider,
    get_openai_config,
)
from viberoute.api.schemas import to_json_schema

logger = logging.getLogger(__name__)

# Key used to wrap array schemas for providers that need an object at the root.
_WRAPPER_KEY = "results"


class GenerationError(RuntimeError):
    """Raised when the model call fails for any reason."""


@dataclass
class ModelReply:
    """Raw reply from a model call, before normalization."""

    text: Optional[str]
    grounding_metadata: Any = None


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

class GeminiClient:
    """Calls Gemini with a response schema and Google Search grounding.

    The SDK client is created on first use so that a missing API key only
    fails the call that needs it, never application startup.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key if api_key is not None else get_gemini_api_key()
        self.model = model or get_gemini_model()
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def generate(self, prompt: str, schema: Dict[str, Any]) -> ModelReply:
        config = types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            response_mime_type="application/json",
            response_schema=schema,
        )

        logger.debug("Calling Gemini generate_content: model=%s", self.model)
        try:
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            logger.error(f"Gemini call failed: {exc}")
            raise GenerationError(str(exc)) from exc

        candidates = getattr(response, "candidates", None) or []
        grounding = getattr(candidates[0], "grounding_metadata", None) if candidates else None
        return ModelReply(text=response.text, grounding_metadata=grounding)


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------

def _annotations_to_grounding(annotations) -> Optional[Dict[str, List[Dict[str, Any]]]]:
    """Reshape ``url_citation`` annotations into Gemini grounding metadata."""
    chunks = []
    for annotation in annotations or []:
        if getattr(annotation, "type", None) != "url_citation":
            continue
        citation = annotation.url_citation
        chunks.append({"web": {"uri": citation.url, "title": getattr(citation, "title", None)}})
    return {"grounding_chunks": chunks} if chunks else None


class OpenAIClient:
    """Calls OpenAI Chat Completions with a strict JSON schema response format."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        cfg = get_openai_config()
        self._api_key = api_key if api_key is not None else cfg["api_key"]
        self.model = model or cfg["model"]
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self._api_key or None)
        return self._client

    def generate(self, prompt: str, schema: Dict[str, Any]) -> ModelReply:
        json_schema = to_json_schema(schema)
        wrapped = json_schema["type"] != "object"
        if wrapped:
            json_schema = {
                "type": "object",
                "properties": {_WRAPPER_KEY: json_schema},
                "required": [_WRAPPER_KEY],
                "additionalProperties": False,
            }

        messages = [
            {"role": "system", "content": "You are a helpful travel guide."},
            {"role": "user", "content": prompt},
        ]

        logger.debug("Calling OpenAI ChatCompletion: model=%s", self.model)
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "city_guide", "schema": json_schema, "strict": True},
                },
            )
        except Exception as exc:
            logger.error(f"OpenAI call failed: {exc}")
            raise GenerationError(str(exc)) from exc

        message = response.choices[0].message
        text = message.content
        if wrapped and text:
            try:
                text = json.dumps(json.loads(text).get(_WRAPPER_KEY, []))
            except (json.JSONDecodeError, AttributeError) as exc:
                # Leave the text as is; the normalizer reports unparseable replies.
                logger.warning("Could not unwrap OpenAI reply: %s", exc)

        grounding = _annotations_to_grounding(getattr(message, "annotations", None))
        return ModelReply(text=text, grounding_metadata=grounding)


def get_model_client():
    """Return the model client for the configured provider."""
    provider = get_llm_provider()
    logger.info("Using %s model provider", provider)
    if provider == "openai":
        return OpenAIClient()
    return GeminiClient()
