import json
import logging
from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from services.survey_engine.models import ConfigurationError

from .errors import InterpretationServiceError
from .models import InterpretationRequest
from .prompts import build_archetype_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

_STRING = genai.protos.Schema(type_=genai.protos.Type.STRING)

RESPONSE_SCHEMA = genai.protos.Schema(
    type_=genai.protos.Type.OBJECT,
    properties={
        "archetype": genai.protos.Schema(type_=genai.protos.Type.STRING, description="Persona name"),
        "definition": genai.protos.Schema(type_=genai.protos.Type.STRING, description="One sentence definition"),
        "coreValues": genai.protos.Schema(
            type_=genai.protos.Type.ARRAY,
            items=_STRING,
            description="3 core value strings",
        ),
        "unexpectedTrait": genai.protos.Schema(type_=genai.protos.Type.STRING, description="Twist or unexpected trait"),
    },
    required=["archetype", "definition", "coreValues", "unexpectedTrait"],
)


class GeminiInterpretationService:
    """Generates archetype narratives with a Gemini model in JSON output mode."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set; the Gemini interpretation backend cannot start")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)
        self._generation_config = genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )

    async def generate(self, request: InterpretationRequest) -> Any:
        prompt = build_archetype_prompt(request)
        logger.debug(f"Sending archetype prompt to {self.model_name} ({len(prompt)} chars)")

        try:
            response = await self._model.generate_content_async(
                prompt,
                generation_config=self._generation_config,
            )
            # .text raises ValueError when the candidate was blocked or is empty
            text = response.text
        except google_exceptions.GoogleAPIError as e:
            raise InterpretationServiceError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise InterpretationServiceError(f"Gemini returned no usable text: {e}") from e

        if not text:
            raise InterpretationServiceError("Gemini returned an empty response")

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise InterpretationServiceError(f"Gemini returned malformed JSON: {e}") from e
