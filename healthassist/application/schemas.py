from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from healthassist.domain.models import DiagnosisSession, MessageType


class BotReply(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    message_type: MessageType = MessageType.TEXT


class HistoryPage(BaseModel):
    sessions: List[DiagnosisSession]
    current: int
    pages: int
    total: int
