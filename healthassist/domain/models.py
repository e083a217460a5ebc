from datetime import datetime, timezone
from enum import Enum
from collections.abc import Mapping
from typing import Any, List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"


class SymptomCategory(str, Enum):
    GENERAL = "general"
    RESPIRATORY = "respiratory"
    DIGESTIVE = "digestive"
    NEUROLOGICAL = "neurological"
    CARDIOVASCULAR = "cardiovascular"
    DERMATOLOGICAL = "dermatological"
    MUSCULOSKELETAL = "musculoskeletal"
    OTHER = "other"


class SymptomSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class ConditionDefinition(BaseModel):
    """One entry of the static condition catalog."""

    model_config = ConfigDict(frozen=True)

    key: str
    symptoms: Tuple[str, ...]
    description: str
    recommendations: Tuple[str, ...]
    urgency: UrgencyLevel


class SymptomReport(BaseModel):
    name: str
    category: Optional[SymptomCategory] = None
    severity: SymptomSeverity = SymptomSeverity.MILD

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


# Scoring accepts bare strings as well as {name} records.
SymptomLike = Union[SymptomReport, str]


def symptom_text(symptom: Any) -> str:
    """Resolve a symptom given as a string, a record or a mapping to its name."""
    if isinstance(symptom, str):
        return symptom
    if isinstance(symptom, Mapping):
        name = symptom.get("name")
    else:
        name = getattr(symptom, "name", None)
    if not isinstance(name, str) or not name:
        raise TypeError(f"Symptom has no usable name: {symptom!r}")
    return name


class MedicalHistoryEntry(BaseModel):
    condition: str
    year: Optional[int] = None


class Medication(BaseModel):
    name: str
    dosage: Optional[str] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PatientContext(_CamelModel):
    # Only the number of history and medication entries is scored, so any
    # item shape is accepted here. Sessions keep the typed records.
    age: int = Field(..., ge=1, le=120)
    gender: Optional[str] = None
    medical_history: List[Any] = []
    current_medications: List[Any] = []


class DiagnosisRequest(PatientContext):
    symptoms: List[SymptomLike] = []

    @property
    def context(self) -> PatientContext:
        return PatientContext(
            age=self.age,
            gender=self.gender,
            medical_history=self.medical_history,
            current_medications=self.current_medications,
        )


class ConditionScore(BaseModel):
    name: str
    confidence: int
    description: str
    recommendations: Tuple[str, ...]
    urgency_level: UrgencyLevel
    raw_score: float


class ConditionSummary(_CamelModel):
    name: str
    confidence: int = Field(..., ge=0, le=100)
    description: str


class DiagnosisResult(_CamelModel):
    primary_condition: ConditionSummary
    alternative_conditions: List[ConditionSummary] = Field(default_factory=list, max_length=3)
    recommendations: List[str] = []
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    disclaimer_shown: bool = True


class ValidationResult(NamedTuple):
    is_valid: bool
    message: str


# Diagnosis sessions

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class MessageSender(str, Enum):
    USER = "user"
    BOT = "bot"


class MessageType(str, Enum):
    TEXT = "text"
    SYMPTOM = "symptom"
    QUESTION = "question"
    DIAGNOSIS = "diagnosis"
    ASSESSMENT_READY = "assessment_ready"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(_CamelModel):
    message: str
    sender: MessageSender
    message_type: MessageType = MessageType.TEXT
    timestamp: datetime = Field(default_factory=_utcnow)


class DiagnosisSession(_CamelModel):
    session_id: str
    user_id: str
    age: int = Field(..., ge=1, le=120)
    gender: Gender
    symptoms: List[SymptomReport] = []
    medical_history: List[MedicalHistoryEntry] = []
    current_medications: List[Medication] = []
    diagnosis: Optional[DiagnosisResult] = None
    chat_messages: List[ChatMessage] = []
    status: SessionStatus = SessionStatus.ACTIVE
    created_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    def add_message(self, message: str, sender: MessageSender,
                    message_type: MessageType = MessageType.TEXT) -> ChatMessage:
        entry = ChatMessage(message=message, sender=sender, message_type=message_type)
        self.chat_messages.append(entry)
        return entry

    def complete(self, result: DiagnosisResult) -> None:
        self.diagnosis = result
        self.status = SessionStatus.COMPLETED
        self.completed_at = _utcnow()
