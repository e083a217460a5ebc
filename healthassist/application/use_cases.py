import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Union

from pydantic import ValidationError

from healthassist.domain.catalog import CONDITION_CATALOG
from healthassist.domain.errors import ComputationFault, InvalidInputError
from healthassist.domain.models import (
    ConditionDefinition,
    ConditionScore,
    ConditionSummary,
    DiagnosisRequest,
    DiagnosisResult,
    SymptomCategory,
    UrgencyLevel,
    ValidationResult,
)
from healthassist.domain.rules import (
    MAX_ALTERNATIVES,
    aggregate_recommendations,
    normalize_symptom,
    rank_conditions,
    resolve_urgency,
    score_condition,
)


logger = logging.getLogger(__name__)


MAX_SUGGESTIONS = 10
MIN_SYMPTOM_NAME_LENGTH = 2

VALID_CATEGORIES = tuple(c.value for c in SymptomCategory)


def professional_evaluation_result() -> DiagnosisResult:
    """Returned when no condition clears the inclusion threshold."""
    return DiagnosisResult(
        primary_condition=ConditionSummary(
            name="Symptoms Require Professional Evaluation",
            confidence=0,
            description=(
                "The symptoms you described require professional medical evaluation "
                "for accurate diagnosis."
            ),
        ),
        alternative_conditions=[],
        recommendations=[
            "Schedule an appointment with your healthcare provider",
            "Keep a symptom diary noting when symptoms occur",
            "Monitor your symptoms for any changes",
            "Seek immediate care if symptoms worsen significantly",
        ],
        urgency_level=UrgencyLevel.MEDIUM,
        disclaimer_shown=True,
    )


def unavailable_result() -> DiagnosisResult:
    """Returned when scoring fails unexpectedly."""
    return DiagnosisResult(
        primary_condition=ConditionSummary(
            name="Unable to Generate Diagnosis",
            confidence=0,
            description=(
                "An error occurred while analyzing your symptoms. "
                "Please consult with a healthcare professional."
            ),
        ),
        alternative_conditions=[],
        recommendations=[
            "Consult with a healthcare provider for proper evaluation",
            "Keep track of your symptoms",
            "Seek immediate care if symptoms are severe or worsening",
        ],
        urgency_level=UrgencyLevel.MEDIUM,
        disclaimer_shown=True,
    )


def _summary(score: ConditionScore) -> ConditionSummary:
    return ConditionSummary(name=score.name, confidence=score.confidence, description=score.description)


def _coerce_request(request: Union[DiagnosisRequest, Mapping]) -> DiagnosisRequest:
    if isinstance(request, DiagnosisRequest):
        return request
    if not isinstance(request, Mapping):
        raise InvalidInputError("Diagnosis request must be a mapping of symptoms and patient details")
    if not request.get("symptoms"):
        raise InvalidInputError("No symptoms provided for diagnosis")
    try:
        return DiagnosisRequest.model_validate(request)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid diagnosis request: {e}") from e


class DiagnosisEngine:
    """Scores the condition catalog against a symptom report."""

    def __init__(self, catalog: Sequence[ConditionDefinition] = CONDITION_CATALOG):
        self.catalog = tuple(catalog)

    def score_all(self, request: DiagnosisRequest) -> List[ConditionScore]:
        context = request.context
        return [score_condition(request.symptoms, condition, context) for condition in self.catalog]

    def compute(self, request: Union[DiagnosisRequest, Mapping]) -> DiagnosisResult:
        """
        Build the assessment or fail.

        Raises:
            InvalidInputError: no symptoms, or the request does not validate.
            ComputationFault: anything unexpected while scoring.
        """
        request = _coerce_request(request)
        if not request.symptoms:
            raise InvalidInputError("No symptoms provided for diagnosis")

        try:
            surviving = rank_conditions(self.score_all(request))
            if not surviving:
                return professional_evaluation_result()

            primary = surviving[0]
            alternatives = surviving[1:1 + MAX_ALTERNATIVES]
            urgency = resolve_urgency(surviving)

            return DiagnosisResult(
                primary_condition=_summary(primary),
                alternative_conditions=[_summary(c) for c in alternatives],
                recommendations=aggregate_recommendations(primary, surviving, urgency),
                urgency_level=urgency,
                disclaimer_shown=True,
            )
        except Exception as e:
            raise ComputationFault(str(e)) from e

    def generate(self, request: Union[DiagnosisRequest, Mapping]) -> DiagnosisResult:
        """Like ``compute`` but never fails for anything except invalid input."""
        try:
            return self.compute(request)
        except ComputationFault:
            logger.exception("Diagnosis generation failed; returning fallback result")
            return unavailable_result()


_default_engine = DiagnosisEngine()


def generate_diagnosis(request: Union[DiagnosisRequest, Mapping]) -> DiagnosisResult:
    return _default_engine.generate(request)


def get_symptom_suggestions(input_text: Optional[str], catalog: Sequence[ConditionDefinition] = CONDITION_CATALOG) -> List[str]:
    query = (input_text or "").lower().strip()
    suggestions: List[str] = []
    for condition in catalog:
        for symptom in condition.symptoms:
            if symptom in suggestions or query not in normalize_symptom(symptom):
                continue
            suggestions.append(symptom)
            if len(suggestions) >= MAX_SUGGESTIONS:
                return suggestions
    return suggestions


def _field(symptom: Any, name: str) -> Any:
    if isinstance(symptom, Mapping):
        return symptom.get(name)
    return getattr(symptom, name, None)


def validate_symptoms(symptoms: Any) -> ValidationResult:
    if not isinstance(symptoms, (list, tuple)) or len(symptoms) == 0:
        return ValidationResult(False, "At least one symptom is required")

    for symptom in symptoms:
        if isinstance(symptom, str):
            return ValidationResult(False, "Each symptom must have a valid name")
        name = _field(symptom, "name")
        if not isinstance(name, str) or len(name.strip()) < MIN_SYMPTOM_NAME_LENGTH:
            return ValidationResult(False, "Each symptom must have a valid name")

        category = _field(symptom, "category")
        if isinstance(category, SymptomCategory):
            category = category.value
        if category and category not in VALID_CATEGORIES:
            return ValidationResult(False, "Invalid symptom category")

    return ValidationResult(True, "Symptoms are valid")
