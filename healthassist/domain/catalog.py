from typing import Tuple

from .models import ConditionDefinition, UrgencyLevel


# Declaration order is the tie-break order for equal confidence.
CONDITION_CATALOG: Tuple[ConditionDefinition, ...] = (
    # Respiratory
    ConditionDefinition(
        key="common_cold",
        symptoms=("runny nose", "sneezing", "mild cough", "sore throat", "mild fever"),
        description="A viral infection of the upper respiratory tract",
        recommendations=(
            "Get plenty of rest",
            "Stay hydrated with fluids",
            "Use a humidifier or breathe steam",
            "Consider over-the-counter cold medications",
            "Symptoms typically resolve in 7-10 days",
        ),
        urgency=UrgencyLevel.LOW,
    ),
    ConditionDefinition(
        key="flu",
        symptoms=("high fever", "body aches", "fatigue", "chills", "headache", "dry cough"),
        description="Influenza viral infection affecting the respiratory system",
        recommendations=(
            "Rest and stay home to avoid spreading infection",
            "Drink plenty of fluids",
            "Consider antiviral medications if caught early",
            "Monitor fever and seek help if it becomes very high",
            "Recovery typically takes 1-2 weeks",
        ),
        urgency=UrgencyLevel.MEDIUM,
    ),
    ConditionDefinition(
        key="bronchitis",
        symptoms=("persistent cough", "mucus production", "chest discomfort", "mild fever", "fatigue"),
        description="Inflammation of the bronchial tubes in the lungs",
        recommendations=(
            "Rest and avoid irritants like smoke",
            "Use a humidifier",
            "Drink warm liquids",
            "Consider honey for cough relief",
            "See a doctor if symptoms worsen or persist beyond 3 weeks",
        ),
        urgency=UrgencyLevel.MEDIUM,
    ),
    # Digestive
    ConditionDefinition(
        key="gastroenteritis",
        symptoms=("nausea", "vomiting", "diarrhea", "stomach cramps", "mild fever"),
        description="Inflammation of the stomach and intestines, often called stomach flu",
        recommendations=(
            "Stay hydrated with clear fluids",
            "Follow the BRAT diet (bananas, rice, applesauce, toast)",
            "Avoid dairy and fatty foods temporarily",
            "Rest and avoid solid foods until vomiting stops",
            "Seek medical attention if dehydration occurs",
        ),
        urgency=UrgencyLevel.MEDIUM,
    ),
    ConditionDefinition(
        key="acid_reflux",
        symptoms=("heartburn", "chest pain", "regurgitation", "difficulty swallowing", "sour taste"),
        description="Stomach acid backing up into the esophagus",
        recommendations=(
            "Avoid trigger foods (spicy, fatty, acidic)",
            "Eat smaller, more frequent meals",
            "Avoid lying down after eating",
            "Elevate the head of your bed",
            "Consider over-the-counter antacids",
        ),
        urgency=UrgencyLevel.LOW,
    ),
    # Neurological
    ConditionDefinition(
        key="tension_headache",
        symptoms=("headache", "neck tension", "scalp tenderness", "mild sensitivity to light"),
        description="The most common type of headache, often stress-related",
        recommendations=(
            "Apply cold or heat to your head or neck",
            "Practice relaxation techniques",
            "Get adequate sleep",
            "Stay hydrated",
            "Consider over-the-counter pain relievers",
        ),
        urgency=UrgencyLevel.LOW,
    ),
    ConditionDefinition(
        key="migraine",
        symptoms=("severe headache", "nausea", "vomiting", "sensitivity to light", "sensitivity to sound"),
        description="A neurological condition causing intense, debilitating headaches",
        recommendations=(
            "Rest in a quiet, dark room",
            "Apply cold compress to forehead",
            "Stay hydrated",
            "Identify and avoid triggers",
            "Consider prescribed migraine medications",
        ),
        urgency=UrgencyLevel.MEDIUM,
    ),
    # Emergency
    ConditionDefinition(
        key="heart_attack",
        symptoms=("chest pain", "shortness of breath", "nausea", "sweating", "pain radiating to arm"),
        description="Serious medical emergency requiring immediate attention",
        recommendations=(
            "🚨 CALL EMERGENCY SERVICES IMMEDIATELY",
            "Chew aspirin if not allergic",
            "Stay calm and sit upright",
            "Do not drive yourself to hospital",
        ),
        urgency=UrgencyLevel.EMERGENCY,
    ),
    ConditionDefinition(
        key="stroke",
        symptoms=("sudden weakness", "face drooping", "speech difficulty", "severe headache", "confusion"),
        description="Medical emergency caused by interrupted blood flow to the brain",
        recommendations=(
            "🚨 CALL EMERGENCY SERVICES IMMEDIATELY",
            "Note the time symptoms started",
            "Do not give food or water",
            "Keep the person calm and lying down",
        ),
        urgency=UrgencyLevel.EMERGENCY,
    ),
)
