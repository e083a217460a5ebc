from typing import List, Optional, Protocol

from healthassist.domain.models import DiagnosisSession


class SessionRepository(Protocol):
    def save(self, session: DiagnosisSession) -> None:
        ...

    def get(self, session_id: str, user_id: str) -> Optional[DiagnosisSession]:
        ...

    def list_for_user(self, user_id: str) -> List[DiagnosisSession]:
        """Sessions owned by ``user_id``, newest first."""
        ...

    def delete(self, session_id: str, user_id: str) -> bool:
        ...


class LLMPort(Protocol):
    def generate_reply(self, messages: List[dict]) -> str:
        """
        Accepts chat-style messages and returns the assistant's reply text.
        """
        ...
