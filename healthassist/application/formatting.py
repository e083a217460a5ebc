from datetime import datetime, timezone
from typing import Optional

from healthassist.domain.models import DiagnosisResult, UrgencyLevel


URGENCY_HEADINGS = {
    UrgencyLevel.EMERGENCY: "🚨 **Urgency: EMERGENCY** - seek immediate medical care.",
    UrgencyLevel.HIGH: "⚠️ **Urgency: High** - contact a healthcare provider within 24 hours.",
    UrgencyLevel.MEDIUM: "⏰ **Urgency: Medium** - schedule an appointment in the next few days.",
    UrgencyLevel.LOW: "✅ **Urgency: Low** - self-care is likely appropriate.",
}


def format_diagnosis_message(diagnosis: DiagnosisResult, completed_at: Optional[datetime] = None) -> str:
    """Render a finished assessment as a markdown chat message."""
    completed_at = completed_at or datetime.now(timezone.utc)
    lines = ["## 🏥 Health Assessment Complete\n", "---\n"]

    primary = diagnosis.primary_condition
    lines.append("### 📊 Primary Assessment\n")
    lines.append(f"**Condition:** {primary.name}\n")
    lines.append(f"**Confidence Level:** {primary.confidence}%\n")
    lines.append(f"**Description:**\n\n{primary.description}\n")
    lines.append("---\n")

    if diagnosis.alternative_conditions:
        lines.append("### 🔎 Other Possibilities\n")
        for condition in diagnosis.alternative_conditions:
            lines.append(f"- **{condition.name}** ({condition.confidence}%): {condition.description}")
        lines.append("")
        lines.append("---\n")

    lines.append(URGENCY_HEADINGS[diagnosis.urgency_level] + "\n")

    if diagnosis.recommendations:
        lines.append("### 📋 Recommendations\n")
        for i, rec in enumerate(diagnosis.recommendations, 1):
            lines.append(f"**{i}.** {rec}\n")
        lines.append("---\n")

    lines.append("### ⚠️ Important Disclaimer\n")
    lines.append("> This assessment is for **informational purposes only** and should not replace professional medical advice.\n")
    lines.append("> Please consult with a healthcare provider for proper diagnosis and treatment.\n")
    lines.append("---\n")
    lines.append(f"*Assessment completed at {completed_at.strftime('%Y-%m-%d %H:%M %Z').strip()}*")

    return "\n".join(lines)
