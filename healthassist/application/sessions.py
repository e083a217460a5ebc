import logging
import math
import uuid
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from healthassist.application.conversation import ConsultationResponder
from healthassist.application.formatting import format_diagnosis_message
from healthassist.application.ports import SessionRepository
from healthassist.application.schemas import BotReply, HistoryPage
from healthassist.application.use_cases import DiagnosisEngine
from healthassist.domain.errors import SessionNotFoundError, SessionValidationError
from healthassist.domain.models import (
    DiagnosisRequest,
    DiagnosisResult,
    DiagnosisSession,
    Gender,
    MedicalHistoryEntry,
    Medication,
    MessageSender,
    MessageType,
    SymptomReport,
)


logger = logging.getLogger(__name__)


MIN_AGE = 1
MAX_AGE = 120
DEFAULT_HISTORY_LIMIT = 10


class DiagnosisSessionService:
    """Chat-driven diagnosis sessions for an authenticated user."""

    def __init__(
        self,
        repository: SessionRepository,
        responder: Optional[ConsultationResponder] = None,
        engine: Optional[DiagnosisEngine] = None,
    ):
        self.repository = repository
        self.responder = responder or ConsultationResponder()
        self.engine = engine or DiagnosisEngine()

    def _load(self, user_id: str, session_id: str) -> DiagnosisSession:
        session = self.repository.get(session_id, user_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def start_session(self, user_id: str, age: Optional[Union[int, str]],
                      gender: Optional[Union[Gender, str]]) -> DiagnosisSession:
        if not age or not gender:
            raise SessionValidationError("Age and gender are required to start diagnosis")
        try:
            age = int(age)
        except (TypeError, ValueError):
            raise SessionValidationError("Please enter a valid age between 1 and 120")
        if age < MIN_AGE or age > MAX_AGE:
            raise SessionValidationError("Please enter a valid age between 1 and 120")
        try:
            gender = Gender(gender)
        except ValueError:
            raise SessionValidationError("Gender must be one of: male, female, other")

        session = DiagnosisSession(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            age=age,
            gender=gender,
        )
        session.add_message(
            f"Hello! I'm your AI Health Assistant. I understand you're {age} years old and "
            f"{gender.value}. I'm here to help analyze your symptoms and provide health guidance. "
            "Please describe your main symptoms or concerns.",
            MessageSender.BOT,
        )
        self.repository.save(session)
        logger.info("Started diagnosis session %s for user %s", session.session_id, user_id)
        return session

    def add_message(self, user_id: str, session_id: str, message: Optional[str],
                    symptoms: Optional[Iterable[dict]] = None) -> BotReply:
        if not message or not message.strip():
            raise SessionValidationError("Message is required")

        session = self._load(user_id, session_id)
        session.add_message(message.strip(), MessageSender.USER)

        for symptom in symptoms or []:
            if not symptom.get("name") or not symptom.get("category"):
                continue
            try:
                session.symptoms.append(SymptomReport(
                    name=symptom["name"],
                    category=symptom["category"],
                    severity=symptom.get("severity") or "mild",
                ))
            except ValidationError as e:
                logger.warning("Skipping invalid symptom %r: %s", symptom, e)

        reply = self.responder.respond(session, message)
        session.add_message(reply.message, MessageSender.BOT, reply.message_type)
        self.repository.save(session)
        return reply

    def complete_session(
        self,
        user_id: str,
        session_id: str,
        medical_history: Iterable[Union[MedicalHistoryEntry, dict]] = (),
        current_medications: Iterable[Union[Medication, dict]] = (),
    ) -> DiagnosisResult:
        """Score the session's symptoms and close it.

        Raises:
            SessionNotFoundError: unknown session for this user.
            SessionValidationError: nothing has been said in the session yet.
            InvalidInputError: the session has no recorded symptoms.
        """
        session = self._load(user_id, session_id)
        if not session.chat_messages:
            raise SessionValidationError("Please have a conversation before requesting health assessment")

        try:
            session.medical_history = [MedicalHistoryEntry.model_validate(h) for h in medical_history]
            session.current_medications = [Medication.model_validate(m) for m in current_medications]
        except ValidationError as e:
            raise SessionValidationError(f"Invalid medical history or medications: {e}") from e

        request = DiagnosisRequest(
            symptoms=list(session.symptoms),
            age=session.age,
            gender=session.gender.value,
            medical_history=session.medical_history,
            current_medications=session.current_medications,
        )
        result = self.engine.generate(request)

        session.complete(result)
        session.add_message(
            format_diagnosis_message(result, session.completed_at),
            MessageSender.BOT,
            MessageType.DIAGNOSIS,
        )
        self.repository.save(session)
        logger.info("Completed diagnosis session %s: %s (%s)", session_id,
                    result.primary_condition.name, result.urgency_level.value)
        return result

    def get_history(self, user_id: str, page: int = 1, limit: int = DEFAULT_HISTORY_LIMIT) -> HistoryPage:
        page = max(page, 1)
        limit = max(limit, 1)
        sessions: List[DiagnosisSession] = self.repository.list_for_user(user_id)
        total = len(sessions)
        skip = (page - 1) * limit
        return HistoryPage(
            sessions=sessions[skip:skip + limit],
            current=page,
            pages=math.ceil(total / limit),
            total=total,
        )

    def get_session(self, user_id: str, session_id: str) -> DiagnosisSession:
        return self._load(user_id, session_id)

    def delete_session(self, user_id: str, session_id: str) -> None:
        if not self.repository.delete(session_id, user_id):
            raise SessionNotFoundError(session_id)
        logger.info("Deleted diagnosis session %s", session_id)
