import logging
from typing import Any, Optional

import httpx

from services.survey_engine.models import ConfigurationError

from .errors import InterpretationServiceError
from .models import InterpretationRequest

logger = logging.getLogger(__name__)


class RemoteInterpretationService:
    """
    Relays interpretation requests to a separately deployed HTTP endpoint.

    The endpoint receives the InterpretationRequest as camelCase JSON and answers
    with the narrative fields; timeouts are enforced by the caller.
    """

    def __init__(self, service_url: Optional[str]):
        if not service_url:
            raise ConfigurationError("INTERPRETATION_SERVICE_URL is not set; the remote interpretation backend cannot start")
        self.service_url = service_url

    async def generate(self, request: InterpretationRequest) -> Any:
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        async with httpx.AsyncClient() as client:
            try:
                logger.debug(f"Sending POST request to {self.service_url}")
                response = await client.post(
                    self.service_url,
                    headers=headers,
                    content=request.model_dump_json(by_alias=True),
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise InterpretationServiceError(
                    f"Interpretation service returned {e.response.status_code}: {e.response.text}"
                ) from e
            except httpx.RequestError as e:
                raise InterpretationServiceError(f"Request to interpretation service failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise InterpretationServiceError(f"Interpretation service returned malformed JSON: {e}") from e
