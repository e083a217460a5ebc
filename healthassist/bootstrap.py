import logging

from healthassist.application.conversation import ConsultationResponder
from healthassist.application.sessions import DiagnosisSessionService
from healthassist.infrastructure.config import Settings, configure_logging
from healthassist.infrastructure.llm.mistral_client import MistralLLMAdapter
from healthassist.infrastructure.storage.json_store import JsonSessionStore
from healthassist.infrastructure.storage.memory_store import InMemorySessionStore


logger = logging.getLogger(__name__)


def build_session_service(settings: Settings | None = None) -> DiagnosisSessionService:
    """Wire the session service from settings."""
    settings = settings or Settings()
    configure_logging(settings)

    if settings.session_store_path:
        repository = JsonSessionStore(settings.session_store_path)
    else:
        logger.info("HEALTHASSIST_SESSION_STORE not set; sessions are kept in memory")
        repository = InMemorySessionStore()

    llm = None
    if settings.mistral_api_key:
        adapter = MistralLLMAdapter(settings=settings)
        if adapter.available:
            llm = adapter

    return DiagnosisSessionService(repository, responder=ConsultationResponder(llm))
