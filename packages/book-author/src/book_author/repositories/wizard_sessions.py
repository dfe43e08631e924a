"""Wizard session repository."""

from book_author.models import WizardSession, WizardStatus
from book_author.result import Result

from .base import JsonRepository


class WizardSessionRepository(JsonRepository[WizardSession]):
    model = WizardSession
    collection = "wizard_sessions"
    entity_name = "Session"

    def get_by_owner(self, owner_id: str) -> Result[list[WizardSession]]:
        """Sessions of an owner, most recently modified first."""
        result = self._query(lambda doc: doc.get("owner_id") == owner_id)
        return result.map(lambda sessions: sorted(sessions, key=lambda s: s.modified_at, reverse=True))

    def get_active(self, owner_id: str) -> Result[WizardSession]:
        """The owner's latest in-progress session."""
        sessions = self.get_by_owner(owner_id)
        if sessions.is_failure:
            return sessions
        active = next((s for s in sessions.value if s.status == WizardStatus.IN_PROGRESS), None)
        if active is None:
            return Result.fail("No active session")
        return Result.ok(active)
