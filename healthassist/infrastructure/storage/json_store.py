"""Diagnosis session storage backed by a single JSON file."""
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from healthassist.application.ports import SessionRepository
from healthassist.domain.models import DiagnosisSession


class JsonSessionStore(SessionRepository):
    """Stores diagnosis sessions keyed by session id in a JSON file."""

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize JsonSessionStore.

        Args:
            storage_path: Path to the JSON file.
                         Defaults to .healthassist/sessions.json in the project root.
        """
        if storage_path is None:
            project_root = Path(__file__).parent.parent.parent.parent
            storage_path = str(project_root / ".healthassist" / "sessions.json")

        self.storage_path = storage_path
        self._ensure_storage_exists()

    def _ensure_storage_exists(self) -> None:
        """Create storage directory and file if they don't exist."""
        storage_dir = os.path.dirname(self.storage_path)
        if storage_dir and not os.path.exists(storage_dir):
            os.makedirs(storage_dir, exist_ok=True)

        if not os.path.exists(self.storage_path) or os.path.getsize(self.storage_path) == 0:
            self._save_all({})

    def _load_all(self) -> Dict[str, Any]:
        try:
            with open(self.storage_path, 'r') as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}

    def _save_all(self, sessions: Dict[str, Any]) -> None:
        with open(self.storage_path, 'w') as f:
            json.dump(sessions, f, indent=2)

    def save(self, session: DiagnosisSession) -> None:
        sessions = self._load_all()
        sessions[session.session_id] = session.model_dump(mode="json", by_alias=True)
        self._save_all(sessions)

    def get(self, session_id: str, user_id: str) -> Optional[DiagnosisSession]:
        """
        Get a session owned by ``user_id``.

        Returns:
            The session, or None if it does not exist or belongs to someone else
        """
        record = self._load_all().get(session_id)
        if record is None:
            return None
        session = DiagnosisSession.model_validate(record)
        if session.user_id != user_id:
            return None
        return session

    def list_for_user(self, user_id: str) -> List[DiagnosisSession]:
        sessions = [DiagnosisSession.model_validate(r) for r in self._load_all().values()]
        owned = [s for s in sessions if s.user_id == user_id]
        return sorted(owned, key=lambda s: s.created_at, reverse=True)

    def delete(self, session_id: str, user_id: str) -> bool:
        sessions = self._load_all()
        record = sessions.get(session_id)
        if record is None or record.get("userId") != user_id:
            return False
        del sessions[session_id]
        self._save_all(sessions)
        return True
