"""
Session management for the routine advisor
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Dict, Optional

from routine_builder.catalog.store import CatalogStore
from routine_builder.chatbot.relay import RelayClient
from routine_builder.chatbot.session import AdvisorSession
from routine_builder.errors import SessionNotFoundError
from routine_builder.integrations.contracts.catalog import CatalogSource

logger = logging.getLogger(__name__)


class StateManager:
    """Owns the live AdvisorSession objects.

    The session id doubles as the storage scope, so a session created again
    with a previous id (a page reload) picks up the saved selection and
    display preference.
    """

    def __init__(self, store, catalog_source: CatalogSource, relay_factory: Callable[[], RelayClient]):
        self.store = store
        self.catalog_source = catalog_source
        self.relay_factory = relay_factory
        self._sessions: Dict[str, AdvisorSession] = {}

    async def create_session(self, session_id: Optional[str] = None) -> AdvisorSession:
        """Create a new session, or return the live one for ``session_id``."""
        if session_id and session_id in self._sessions:
            return self._sessions[session_id]
        return await self.resume_session(session_id or str(uuid.uuid4()))

    async def resume_session(self, session_id: str) -> AdvisorSession:
        """Start a fresh session over the storage scope ``session_id``.

        A live session with the same id is replaced; its transcript is lost,
        the persisted selection and display preference are picked up.
        """
        session = AdvisorSession(
            session_id=session_id,
            catalog=CatalogStore(self.catalog_source),
            store=self.store,
            relay=self.relay_factory(),
        )
        self._sessions[session_id] = session
        await session.start()
        logger.info("Started session %s (%d products restored)", session_id, len(session.selection))
        return session

    def get_session(self, session_id: str) -> Optional[AdvisorSession]:
        """Get a live session"""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> AdvisorSession:
        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> bool:
        """Drop the live session. Persisted state stays for a later resume."""
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
