import logging
import random
from typing import List, Optional

from healthassist.application.ports import LLMPort
from healthassist.application.schemas import BotReply
from healthassist.domain.models import DiagnosisSession, MessageSender, MessageType


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a professional AI health assistant. You are not a doctor. "
    "Listen carefully to the user's symptoms, acknowledge their concern, and ask one or two "
    "focused follow-up questions at a time. Keep responses concise (2-4 sentences) and use "
    "clear, non-medical language. Never provide a specific diagnosis and never recommend "
    "specific medications. Always suggest consulting a healthcare provider for proper "
    "evaluation, and for serious symptoms tell the user to seek immediate medical attention."
)

# First matching category wins, so order matters.
SYMPTOM_KEYWORDS = {
    "pain": ["pain", "ache", "hurt", "sore", "tender", "sharp", "dull", "throbbing", "burning", "stabbing"],
    "respiratory": ["cough", "shortness of breath", "wheezing", "congestion", "runny nose", "stuffy nose", "sneezing"],
    "fever": ["fever", "temperature", "hot", "chills", "sweating", "feverish"],
    "gastrointestinal": ["nausea", "vomit", "diarrhea", "constipation", "stomach", "belly", "abdominal"],
    "neurological": ["headache", "migraine", "dizzy", "lightheaded", "confusion", "memory"],
    "skin": ["rash", "itch", "red", "swollen", "bump", "spot"],
    "general": ["tired", "fatigue", "weak", "exhausted", "energy", "sleep"],
}

INITIAL_RESPONSES = [
    "Thank you for sharing that with me. I'm here to help you understand your symptoms better. "
    "Can you tell me when you first started experiencing this?",
    "I appreciate you describing your symptoms. To provide the best guidance, could you help me "
    "understand how long you've been feeling this way?",
    "I understand your concern about these symptoms. Let me ask a few questions to better assist you. "
    "When did you first notice these symptoms?",
]

FOLLOW_UP_RESPONSES = {
    "pain": [
        "I see you're experiencing pain. Can you describe the type of pain - is it sharp, dull, "
        "throbbing, or burning? And where exactly do you feel it most?",
        "Pain can be quite concerning. On a scale of 1-10, how would you rate the intensity? "
        "Also, does anything make it better or worse?",
        "Thank you for mentioning the pain. How would you describe it - constant or comes and goes? "
        "Have you tried anything to relieve it?",
    ],
    "respiratory": [
        "Respiratory symptoms can be bothersome. Is this a dry cough or are you bringing up any mucus? "
        "Also, are you having any difficulty breathing?",
        "I understand you're having breathing-related symptoms. Have you noticed if they're worse at "
        "certain times of the day or with activity?",
        "These respiratory symptoms sound uncomfortable. Have you been around anyone who's been sick "
        "recently, or noticed any triggers?",
    ],
    "fever": [
        "Fever often indicates your body is fighting something. Have you been able to take your "
        "temperature? Are you experiencing chills or sweating?",
        "A fever can make you feel quite unwell. Along with the fever, are you experiencing any body "
        "aches, headache, or other symptoms?",
        "Thank you for mentioning the fever. How long have you had it, and have you tried any "
        "fever-reducing medications?",
    ],
    "general": [
        "Fatigue can really impact your daily life. How long have you been feeling this way? "
        "Is it affecting your ability to do normal activities?",
        "Feeling tired or weak can be concerning. Have you noticed if it's worse at certain times, "
        "or if you're getting enough restful sleep?",
        "I understand you're feeling exhausted. Are there any other symptoms accompanying this "
        "fatigue, like changes in appetite or mood?",
    ],
}

PROGRESSION_RESPONSES = [
    "Based on what you've shared so far, I'm getting a clearer picture. Are there any other symptoms, "
    "even minor ones, that you've noticed?",
    "Thank you for providing those details. I'd like to understand the complete picture. Have you "
    "experienced any changes in appetite, sleep, or energy levels?",
    "This information is very helpful. To ensure I don't miss anything important, are there any other "
    "symptoms or concerns you'd like to mention?",
    "I appreciate your detailed responses. Sometimes people forget to mention seemingly unrelated "
    "symptoms - is there anything else, however small, that you've noticed?",
]

ASSESSMENT_RESPONSES = [
    "You've provided very comprehensive information about your symptoms. Based on our conversation, "
    "I have enough details to provide some guidance. Would you like me to share my assessment?",
    "Thank you for being so thorough in describing your symptoms. I believe I have sufficient "
    "information to offer some insights. Shall I proceed with my analysis?",
    "Based on everything you've shared, I can now provide you with a health assessment. This will "
    "include some observations and recommendations. Would you like to proceed?",
]

CHEST_PAIN_ADVICE = (
    " If you're experiencing severe chest pain, especially with shortness of breath, "
    "please consider seeking immediate medical attention."
)
SEVERE_ADVICE = " For any severe or emergency symptoms, please don't hesitate to seek immediate medical care."

INITIAL_MESSAGE_LIMIT = 2
PROGRESSION_MESSAGE_COUNT = 5
ASSESSMENT_MESSAGE_COUNT = 8


def detect_symptom_category(message: str) -> str:
    msg_lower = message.lower()
    for category, keywords in SYMPTOM_KEYWORDS.items():
        if any(keyword in msg_lower for keyword in keywords):
            return category
    return "general"


class ConsultationResponder:
    """Produces the assistant's next chat reply for a diagnosis session.

    Uses the LLM when one is configured and falls back to canned,
    keyword-driven replies when it is missing or fails.
    """

    def __init__(self, llm: Optional[LLMPort] = None, rng: Optional[random.Random] = None):
        self.llm = llm
        self.rng = rng or random.Random()

    def respond(self, session: DiagnosisSession, user_message: str) -> BotReply:
        """``session`` must already contain ``user_message`` as its last entry."""
        if self.llm is not None:
            try:
                reply = self.llm.generate_reply(self._build_messages(session))
                return BotReply(message=reply.strip(), message_type=MessageType.TEXT)
            except Exception as e:
                logger.error("LLM reply failed, using rule-based response: %s", e)
        return self.fallback_reply(len(session.chat_messages), user_message)

    def _build_messages(self, session: DiagnosisSession) -> List[dict]:
        context = (
            f"Patient context: age={session.age}, gender={session.gender.value}, "
            f"messages so far={len(session.chat_messages)}"
        )
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "system", "content": context},
        ]
        for msg in session.chat_messages:
            role = "user" if msg.sender == MessageSender.USER else "assistant"
            messages.append({"role": role, "content": msg.message})
        return messages

    def fallback_reply(self, message_count: int, user_message: str) -> BotReply:
        category = detect_symptom_category(user_message)

        if message_count <= INITIAL_MESSAGE_LIMIT:
            responses = INITIAL_RESPONSES
        elif message_count >= ASSESSMENT_MESSAGE_COUNT:
            responses = ASSESSMENT_RESPONSES
        elif message_count >= PROGRESSION_MESSAGE_COUNT:
            responses = PROGRESSION_RESPONSES
        else:
            responses = FOLLOW_UP_RESPONSES.get(category, FOLLOW_UP_RESPONSES["general"])

        reply = self.rng.choice(responses)

        msg_lower = user_message.lower()
        if "chest pain" in msg_lower:
            reply += CHEST_PAIN_ADVICE
        elif "severe" in msg_lower or "emergency" in msg_lower:
            reply += SEVERE_ADVICE

        if message_count >= ASSESSMENT_MESSAGE_COUNT:
            message_type = MessageType.ASSESSMENT_READY
        elif "?" in reply:
            message_type = MessageType.QUESTION
        else:
            message_type = MessageType.TEXT

        return BotReply(message=reply, message_type=message_type)
