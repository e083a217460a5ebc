import math
import re
from typing import Iterable, List, Sequence

from .models import (
    ConditionDefinition,
    ConditionScore,
    PatientContext,
    UrgencyLevel,
    symptom_text,
)


MIN_CONFIDENCE = 10
MAX_CONFIDENCE = 95
INCLUSION_THRESHOLD = 15
MAX_ALTERNATIVES = 3

GENERAL_RECOMMENDATIONS = (
    "Monitor your symptoms and note any changes",
    "Maintain good hydration",
    "Get adequate rest",
)

URGENCY_CALL_TO_ACTION = {
    UrgencyLevel.EMERGENCY: "🚨 SEEK IMMEDIATE EMERGENCY MEDICAL CARE",
    UrgencyLevel.HIGH: "Contact your healthcare provider within 24 hours",
    UrgencyLevel.MEDIUM: "Consider scheduling a medical appointment within a few days",
}

# Highest first
URGENCY_PRECEDENCE = (
    UrgencyLevel.EMERGENCY,
    UrgencyLevel.HIGH,
    UrgencyLevel.MEDIUM,
)

_PUNCTUATION = re.compile(r"[^\w\s]")
_WORD_START = re.compile(r"\b\w")


def normalize_symptom(text: str) -> str:
    return _PUNCTUATION.sub("", text.lower().strip())


def calculate_symptom_match(user_symptoms: Sequence, condition_symptoms: Sequence[str]) -> float:
    """
    Percentage of user symptoms found in a condition's symptom list.

    Every (user symptom, condition phrase) pair where one contains the other
    counts as a match, so one symptom hitting several phrases can push the
    result above 100.
    """
    normalized_user = [normalize_symptom(symptom_text(s)) for s in user_symptoms]
    normalized_condition = [normalize_symptom(s) for s in condition_symptoms]

    matches = 0
    total_weight = 0
    for user_symptom in normalized_user:
        for condition_symptom in normalized_condition:
            if user_symptom in condition_symptom or condition_symptom in user_symptom:
                matches += 1
        total_weight += 1

    return (matches / total_weight) * 100 if total_weight > 0 else 0


def adjust_confidence(raw_score: float, context: PatientContext) -> float:
    adjusted = raw_score

    if context.age < 18:
        adjusted *= 0.9
    elif context.age > 65:
        adjusted *= 0.95

    if context.medical_history:
        adjusted *= 0.9

    if context.current_medications:
        adjusted *= 0.95

    return min(max(adjusted, MIN_CONFIDENCE), MAX_CONFIDENCE)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def display_name(key: str) -> str:
    """``heart_attack`` -> ``Heart Attack``."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), key.replace("_", " "))


def score_condition(user_symptoms: Sequence, condition: ConditionDefinition,
                    context: PatientContext) -> ConditionScore:
    raw = calculate_symptom_match(user_symptoms, condition.symptoms)
    return ConditionScore(
        name=display_name(condition.key),
        confidence=round_half_up(adjust_confidence(raw, context)),
        description=condition.description,
        recommendations=condition.recommendations,
        urgency_level=condition.urgency,
        raw_score=raw,
    )


def rank_conditions(scores: Iterable[ConditionScore]) -> List[ConditionScore]:
    """Drop scores at or below the inclusion threshold, best first.

    ``sorted`` is stable, so equal confidences keep catalog order.
    """
    surviving = [s for s in scores if s.confidence > INCLUSION_THRESHOLD]
    return sorted(surviving, key=lambda s: s.confidence, reverse=True)


def resolve_urgency(surviving: Iterable[ConditionScore]) -> UrgencyLevel:
    levels = {s.urgency_level for s in surviving}
    for level in URGENCY_PRECEDENCE:
        if level in levels:
            return level
    return UrgencyLevel.LOW


def aggregate_recommendations(primary: ConditionScore, surviving: Sequence[ConditionScore],
                              urgency: UrgencyLevel) -> List[str]:
    """Merge the primary's advice with general advice and the urgency call to action.

    ``surviving`` is accepted so callers pass the whole ranked set, but only the
    primary contributes condition-specific advice; the influence of the other
    survivors arrives through ``urgency``.
    """
    recommendations = dict.fromkeys(primary.recommendations)
    recommendations.update(dict.fromkeys(GENERAL_RECOMMENDATIONS))

    call_to_action = URGENCY_CALL_TO_ACTION.get(urgency)
    if call_to_action:
        recommendations[call_to_action] = None

    return list(recommendations)
