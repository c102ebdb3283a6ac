class InterpretationServiceError(Exception):
    """Raised by an interpretation backend when the exchange itself fails."""
    pass


class AnalysisUnavailable(Exception):
    """
    The archetype analysis could not be produced.

    Covers transport failures, non-success statuses, timeouts, malformed bodies and
    responses that fail shape validation. Locally computed scores are unaffected.
    """
    def __init__(self, reason: str):
        super().__init__(f"Analysis unavailable: {reason}")
        self.reason = reason
