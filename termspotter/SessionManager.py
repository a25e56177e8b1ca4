"""Session lifecycle manager: creates and destroys LectureSession instances.

Each lecture session owns its own index, cache, recency set and display
state, so several lectures can be followed side by side.
"""

import logging
import threading
import uuid
from typing import Callable, Dict, Optional

from termspotter.LectureSession import LectureSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates and destroys LectureSession objects; tracks active sessions.

    Args:
        config: Configuration dictionary passed to each LectureSession.
        session_factory: Optional callable (config) -> LectureSession, for tests.
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        session_factory: Optional[Callable[[Optional[Dict]], LectureSession]] = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory if session_factory is not None else LectureSession

        self._sessions: Dict[str, LectureSession] = {}
        self._sessions_lock = threading.Lock()

    def create_session(self) -> tuple[str, LectureSession]:
        """Create a new LectureSession under a fresh UUID.

        Returns:
            (session_id, session)
        """
        session_id = str(uuid.uuid4())
        session = self._session_factory(self._config)

        with self._sessions_lock:
            self._sessions[session_id] = session

        logger.info("SessionManager: session created id=%s", session_id)
        return session_id, session

    def get_session(self, session_id: str) -> Optional[LectureSession]:
        with self._sessions_lock:
            return self._sessions.get(session_id)

    def destroy_session(self, session_id: str) -> None:
        """Close and remove a session by ID. Unknown IDs are a no-op.

        Args:
            session_id: UUID of the session to destroy.
        """
        with self._sessions_lock:
            session = self._sessions.pop(session_id, None)

        if session is None:
            logger.debug("SessionManager: destroy_session unknown id=%s", session_id)
            return

        session.close()
        logger.info("SessionManager: session destroyed id=%s", session_id)

    def close_all(self) -> None:
        """Close and remove every session."""
        with self._sessions_lock:
            sessions = list(self._sessions.items())
            self._sessions.clear()

        for session_id, session in sessions:
            session.close()
            logger.info("SessionManager: session closed id=%s", session_id)

    def session_count(self) -> int:
        with self._sessions_lock:
            return len(self._sessions)
