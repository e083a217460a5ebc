from types import SimpleNamespace

import pytest

from healthassist.application.use_cases import (
    DiagnosisEngine,
    generate_diagnosis,
    get_symptom_suggestions,
    validate_symptoms,
)
from healthassist.domain.errors import ComputationFault, InvalidInputError
from healthassist.domain.models import (
    DiagnosisRequest,
    DiagnosisResult,
    SymptomCategory,
    SymptomReport,
    UrgencyLevel,
)


def _request(symptoms, **context):
    context.setdefault("age", 30)
    context.setdefault("gender", "female")
    return {"symptoms": symptoms, **context}


class TestGenerateDiagnosis:
    """Scenarios for the diagnosis entry point."""

    def test_common_cold_scenario(self):
        result = generate_diagnosis(_request(["runny nose", "sneezing", "mild fever"]))

        assert isinstance(result, DiagnosisResult)
        assert result.primary_condition.name == "Common Cold"
        assert result.primary_condition.confidence == 95
        assert [c.name for c in result.alternative_conditions] == ["Bronchitis", "Gastroenteritis"]
        assert [c.confidence for c in result.alternative_conditions] == [33, 33]
        # bronchitis and gastroenteritis survive through "mild fever"
        assert result.urgency_level == UrgencyLevel.MEDIUM
        assert result.recommendations[:5] == [
            "Get plenty of rest",
            "Stay hydrated with fluids",
            "Use a humidifier or breathe steam",
            "Consider over-the-counter cold medications",
            "Symptoms typically resolve in 7-10 days",
        ]
        assert result.recommendations[-1] == "Consider scheduling a medical appointment within a few days"
        assert result.disclaimer_shown is True

    def test_heart_attack_scenario_is_emergency(self):
        result = generate_diagnosis(_request(["chest pain", "shortness of breath", "sweating"]))

        assert result.primary_condition.name == "Heart Attack"
        assert result.urgency_level == UrgencyLevel.EMERGENCY
        assert [c.name for c in result.alternative_conditions] == ["Acid Reflux"]
        assert "🚨 SEEK IMMEDIATE EMERGENCY MEDICAL CARE" in result.recommendations

    def test_emergency_escalates_when_not_primary(self):
        result = generate_diagnosis(_request(["nausea", "vomiting", "diarrhea", "stomach cramps"]))

        assert result.primary_condition.name == "Gastroenteritis"
        assert "Heart Attack" in [c.name for c in result.alternative_conditions]
        assert result.urgency_level == UrgencyLevel.EMERGENCY

    def test_ties_follow_catalog_order_and_alternatives_are_capped(self):
        result = generate_diagnosis(_request(["headache"]))

        assert result.primary_condition.name == "Flu"
        assert [c.name for c in result.alternative_conditions] == ["Tension Headache", "Migraine", "Stroke"]
        assert all(c.confidence == 95 for c in result.alternative_conditions)

    def test_no_matching_condition_returns_placeholder(self):
        result = generate_diagnosis(_request(["itchy elbow"]))

        assert result.primary_condition.name == "Symptoms Require Professional Evaluation"
        assert result.primary_condition.confidence == 0
        assert result.alternative_conditions == []
        assert len(result.recommendations) == 4
        assert result.urgency_level == UrgencyLevel.MEDIUM
        assert result.disclaimer_shown is True

    def test_context_lowers_confidence(self):
        result = generate_diagnosis(_request(
            ["runny nose", "sneezing", "mild fever"],
            age=70,
            medical_history=[{"condition": "asthma", "year": 2015}],
        ))
        # 100 * 0.95 * 0.9
        assert result.primary_condition.confidence == 86

    def test_camel_case_context_keys_apply_penalties(self):
        result = generate_diagnosis({
            "symptoms": ["runny nose", "sneezing", "mild fever"],
            "age": 30,
            "medicalHistory": [{"condition": "asthma"}],
            "currentMedications": [{"name": "ibuprofen"}],
        })
        # 100 * 0.9 * 0.95
        assert result.primary_condition.confidence == 86

    def test_context_entries_of_any_shape_are_counted(self):
        result = generate_diagnosis(_request(
            ["runny nose", "sneezing", "mild fever"],
            medical_history=["asthma"],
            current_medications=[{"drug": "ibuprofen"}],
        ))
        assert result.primary_condition.confidence == 86

    def test_accepts_request_model_and_symptom_records(self):
        request = DiagnosisRequest(
            symptoms=[SymptomReport(name="Runny nose", category=SymptomCategory.RESPIRATORY), "sneezing"],
            age=30,
        )
        assert generate_diagnosis(request).primary_condition.name == "Common Cold"

    def test_same_input_same_output(self):
        request = _request(["chest pain", "nausea"])
        assert generate_diagnosis(request) == generate_diagnosis(request)

    @pytest.mark.parametrize("symptoms", [
        ["runny nose"],
        ["chest pain", "shortness of breath", "sweating"],
        ["headache", "confusion", "nausea", "fatigue", "chills"],
        ["sensitivity"],
        ["itchy elbow"],
    ])
    def test_result_invariants(self, symptoms):
        result = generate_diagnosis(_request(symptoms, age=12, current_medications=[{"name": "ibuprofen"}]))
        assert 0 <= result.primary_condition.confidence <= 95
        assert len(result.alternative_conditions) <= 3
        assert result.disclaimer_shown is True

    def test_camel_case_serialisation(self):
        data = generate_diagnosis(_request(["heartburn"])).model_dump(mode="json", by_alias=True)
        assert set(data) == {
            "primaryCondition", "alternativeConditions", "recommendations", "urgencyLevel", "disclaimerShown",
        }
        assert data["urgencyLevel"] == "low"


class TestInvalidInput:
    """Only missing or malformed input is raised to the caller."""

    def test_empty_symptoms(self):
        with pytest.raises(InvalidInputError):
            generate_diagnosis(_request([]))

    def test_missing_symptoms(self):
        with pytest.raises(InvalidInputError):
            generate_diagnosis({"age": 30})

    def test_empty_request_model(self):
        with pytest.raises(InvalidInputError):
            generate_diagnosis(DiagnosisRequest(symptoms=[], age=30))

    def test_age_out_of_range(self):
        with pytest.raises(InvalidInputError):
            generate_diagnosis(_request(["cough"], age=0))

    def test_status_code(self):
        assert InvalidInputError.status_code == 400


class TestFaultFallback:
    """Unexpected faults degrade to the generic result."""

    def test_blank_symptom_name_falls_back(self):
        result = generate_diagnosis(_request([{"name": "   "}]))
        assert result.primary_condition.name == "Unable to Generate Diagnosis"
        assert result.primary_condition.confidence == 0
        assert result.urgency_level == UrgencyLevel.MEDIUM
        assert len(result.recommendations) == 3

    def test_malformed_catalog_raises_fault_from_compute(self):
        broken = SimpleNamespace(
            key="broken", symptoms=None, description="", recommendations=(), urgency=UrgencyLevel.LOW,
        )
        engine = DiagnosisEngine(catalog=[broken])
        with pytest.raises(ComputationFault):
            engine.compute(_request(["cough"]))

    def test_malformed_catalog_falls_back_in_generate(self):
        broken = SimpleNamespace(
            key="broken", symptoms=None, description="", recommendations=(), urgency=UrgencyLevel.LOW,
        )
        result = DiagnosisEngine(catalog=[broken]).generate(_request(["cough"]))
        assert result.primary_condition.name == "Unable to Generate Diagnosis"
        assert result.disclaimer_shown is True


class TestSymptomSuggestions:
    """Test autocomplete lookup."""

    def test_distinct_matches_in_catalog_order(self):
        assert get_symptom_suggestions("fever") == ["mild fever", "high fever"]

    def test_input_is_lowercased_and_trimmed(self):
        assert get_symptom_suggestions("  HEAD ") == ["headache", "severe headache"]

    def test_capped_at_ten(self):
        suggestions = get_symptom_suggestions("")
        assert len(suggestions) == 10
        assert suggestions[-1] == "headache"

    def test_no_match(self):
        assert get_symptom_suggestions("xyz") == []

    def test_missing_input_matches_everything(self):
        assert get_symptom_suggestions(None) == get_symptom_suggestions("")


class TestValidateSymptoms:
    """Test symptom list validation."""

    @pytest.mark.parametrize("symptoms", [[], None, "cough", {"name": "cough"}])
    def test_requires_a_list(self, symptoms):
        is_valid, message = validate_symptoms(symptoms)
        assert not is_valid
        assert message == "At least one symptom is required"

    @pytest.mark.parametrize("symptom", [{"name": "a"}, {"name": "  b  "}, {"category": "general"}, "cough", {"name": 42}])
    def test_requires_a_name(self, symptom):
        result = validate_symptoms([{"name": "cough"}, symptom])
        assert result.is_valid is False
        assert result.message == "Each symptom must have a valid name"

    def test_rejects_unknown_category(self):
        result = validate_symptoms([{"name": "cough", "category": "spiritual"}])
        assert result == (False, "Invalid symptom category")

    def test_valid_symptoms(self):
        result = validate_symptoms([
            {"name": " cough ", "category": "respiratory"},
            {"name": "rash"},
            SymptomReport(name="nausea", category=SymptomCategory.DIGESTIVE),
        ])
        assert result.is_valid
        assert result.message == "Symptoms are valid"
