from typing import Dict, List, Optional

from healthassist.application.ports import SessionRepository
from healthassist.domain.models import DiagnosisSession


class InMemorySessionStore(SessionRepository):
    """Keeps sessions for the lifetime of the process."""

    def __init__(self):
        self._sessions: Dict[str, DiagnosisSession] = {}

    def save(self, session: DiagnosisSession) -> None:
        self._sessions[session.session_id] = session.model_copy(deep=True)

    def get(self, session_id: str, user_id: str) -> Optional[DiagnosisSession]:
        session = self._sessions.get(session_id)
        if session is None or session.user_id != user_id:
            return None
        return session.model_copy(deep=True)

    def list_for_user(self, user_id: str) -> List[DiagnosisSession]:
        owned = [s.model_copy(deep=True) for s in self._sessions.values() if s.user_id == user_id]
        return sorted(owned, key=lambda s: s.created_at, reverse=True)

    def delete(self, session_id: str, user_id: str) -> bool:
        if self.get(session_id, user_id) is None:
            return False
        del self._sessions[session_id]
        return True
