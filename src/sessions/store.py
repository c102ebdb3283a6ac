import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from services.survey_engine.collector import ResponseCollector
from services.survey_engine.sampler import QuestionSampler

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """No live session exists under the given id."""
    pass


@dataclass
class SurveySession:
    session_id: str
    collector: ResponseCollector
    last_seen: float = field(default_factory=lambda: time.monotonic())


class SessionStore:
    """
    In-memory registry of live survey sessions, one ResponseCollector each.

    Sessions are discarded once finalized; idle ones are purged lazily on access.
    """

    def __init__(self, sampler: QuestionSampler, ttl_seconds: Optional[float] = 3600):
        self.sampler = sampler
        self.ttl_seconds = ttl_seconds
        self._sessions: Dict[str, SurveySession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> SurveySession:
        session = SurveySession(
            session_id=str(uuid.uuid4()),
            collector=ResponseCollector(self.sampler.sample()),
        )
        with self._lock:
            self._purge_expired()
            self._sessions[session.session_id] = session
        logger.info(
            f"Created survey session {session.session_id} with {len(session.collector.questions)} questions",
            extra={"session_id": session.session_id},
        )
        return session

    def get(self, session_id: str) -> SurveySession:
        with self._lock:
            self._purge_expired()
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.last_seen = time.monotonic()
            return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is not None:
                logger.info(f"Discarded survey session {session_id}", extra={"session_id": session_id})

    def _purge_expired(self) -> None:
        if not self.ttl_seconds:
            return
        cutoff = time.monotonic() - self.ttl_seconds
        expired = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Purged {len(expired)} expired survey session(s)")
