"""In-process registry of open wizard sessions.

Sessions live only in memory: restarting the process discards every
in-flight flow, the same as navigating away. One owner has at most one open
session per flow; opening another discards the old one.
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from nexus.core.config import settings
from nexus.core.errors import NotFoundError
from nexus.wizard.flow import FlowDefinition
from nexus.wizard.session import WizardSession

logger = logging.getLogger(__name__)


class WizardSessionRegistry:
    """Maps session ids to open sessions, evicting idle ones."""

    def __init__(self, ttl: timedelta) -> None:
        self._ttl = ttl
        self._sessions: dict[uuid.UUID, WizardSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, flow: FlowDefinition, owner_id: uuid.UUID) -> WizardSession:
        """Start a new session, discarding the owner's previous one for this flow."""
        self.evict_expired()
        for session in list(self._sessions.values()):
            if session.owner_id == owner_id and session.flow.name == flow.name:
                self._drop(session)

        session = WizardSession(flow, owner_id)
        self._sessions[session.id] = session
        logger.info("Opened %s session %s for %s", flow.name, session.id, owner_id)
        return session

    def get(self, session_id: uuid.UUID, owner_id: uuid.UUID) -> WizardSession:
        """Fetch an open session belonging to owner_id.

        Raises:
            NotFoundError: Unknown, expired, closed, or another owner's session.
        """
        self.evict_expired()
        session = self._sessions.get(session_id)
        if session is None or session.owner_id != owner_id or session.closed:
            raise NotFoundError("Wizard session", str(session_id))
        return session

    def close(self, session_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        """Discard a session (the user navigated away)."""
        self._drop(self.get(session_id, owner_id))

    def forget(self, session: WizardSession) -> None:
        """Remove a session that has already closed itself."""
        self._sessions.pop(session.id, None)

    def evict_expired(self, now: datetime | None = None) -> int:
        """Discard sessions idle longer than the TTL.

        Returns:
            Number of sessions evicted.
        """
        cutoff = (now or datetime.now(UTC)) - self._ttl
        expired = [
            session
            for session in self._sessions.values()
            if session.last_activity < cutoff and not session.submitting
        ]
        for session in expired:
            self._drop(session)
        if expired:
            logger.info("Evicted %d idle wizard sessions", len(expired))
        return len(expired)

    def _drop(self, session: WizardSession) -> None:
        session.discard()
        self._sessions.pop(session.id, None)


registry = WizardSessionRegistry(
    ttl=timedelta(minutes=settings.wizard_session_ttl_minutes)
)


def get_registry() -> WizardSessionRegistry:
    """Dependency returning the process-wide session registry."""
    return registry
