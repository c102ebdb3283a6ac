import asyncio
import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from services.survey_engine.models import AnalysisResult, Answer, AxisScores

from .errors import AnalysisUnavailable, InterpretationServiceError
from .models import AnswerContext, InterpretationRequest, InterpretationResponse
from .service import InterpretationService

logger = logging.getLogger(__name__)


class AnalysisRequestor:
    """
    Packages scores and answer context for the interpretation service and
    validates what comes back before it reaches presentation.

    Exactly one outbound call is made per request_analysis(); retries are the
    caller's decision.
    """

    def __init__(self, service: InterpretationService, timeout: Optional[float] = 30.0):
        self.service = service
        self.timeout = timeout

    @staticmethod
    def build_request(answers: Sequence[Answer], scores: AxisScores) -> InterpretationRequest:
        return InterpretationRequest(
            answers=[AnswerContext.from_answer(a) for a in answers],
            normalized_scores=scores,
        )

    async def request_analysis(
        self,
        answers: Sequence[Answer],
        scores: AxisScores,
        timeout: Optional[float] = None,
    ) -> AnalysisResult:
        """
        Requests an archetype interpretation for a completed session.

        Args:
            answers: The finalized answer sequence, used as narrative context.
            scores: Locally computed normalized scores. These always end up in the
                    result; anything the service says about scores is discarded.
            timeout: Overrides the requestor's timeout for this call only.

        Returns:
            A validated AnalysisResult.

        Raises:
            AnalysisUnavailable: on any failure of the external exchange: transport or
                                 network errors, timeout, malformed JSON or a response
                                 that fails shape validation.
            asyncio.CancelledError: when the caller cancels the awaiting task. The
                                 outbound call is cancelled with it and no result is
                                 produced; callers treat this as analysis unavailable.
        """
        request = self.build_request(answers, scores)
        timeout = self.timeout if timeout is None else timeout
        logger.info(f"Requesting archetype analysis for {len(request.answers)} answers")

        try:
            payload = await asyncio.wait_for(self.service.generate(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error(f"Interpretation service did not answer within {timeout}s")
            raise AnalysisUnavailable("timeout")
        except InterpretationServiceError as e:
            logger.error(f"Interpretation service failed: {e}")
            raise AnalysisUnavailable(str(e)) from e
        except Exception as e:
            # Backends and their SDKs can surface transport failures under other types
            logger.error(f"Interpretation service raised {type(e).__name__}: {e}")
            raise AnalysisUnavailable(f"{type(e).__name__}: {e}") from e

        try:
            narrative = InterpretationResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Interpretation response failed validation: {e.error_count()} error(s)")
            logger.debug(f"Rejected interpretation payload: {payload!r}")
            raise AnalysisUnavailable("invalid response shape") from e

        result = AnalysisResult(
            archetype=narrative.archetype,
            definition=narrative.definition,
            core_values=narrative.core_values,
            unexpected_trait=narrative.unexpected_trait,
            scores=scores,
        )
        logger.info(f"Archetype analysis complete: {result.archetype}")
        return result
