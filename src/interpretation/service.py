from typing import Any, Protocol

from config.settings import InterpretationSettings

from .models import InterpretationRequest


class InterpretationService(Protocol):
    """
    Capability interface for narrative generation.

    generate() performs one request/response exchange and returns the parsed JSON body.
    Transport and decoding failures are raised as InterpretationServiceError; the
    body's shape is checked by the caller.
    """

    async def generate(self, request: InterpretationRequest) -> Any:
        ...


def build_interpretation_service(settings: InterpretationSettings) -> InterpretationService:
    """Creates the configured backend. Missing credentials raise ConfigurationError."""
    if settings.backend == "remote":
        from .remote import RemoteInterpretationService
        return RemoteInterpretationService(settings.service_url)

    from .gemini import GeminiInterpretationService
    return GeminiInterpretationService(settings.gemini_api_key or "", model_name=settings.model)
