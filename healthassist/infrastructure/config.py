import os
import logging

logger = logging.getLogger(__name__)


def get_secret(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value


class Settings:
    @property
    def mistral_api_key(self) -> str | None:
        return get_secret("MISTRAL_API_KEY")

    @property
    def mistral_model(self) -> str:
        return get_secret("MISTRAL_MODEL", "mistral-large-latest") or "mistral-large-latest"

    @property
    def session_store_path(self) -> str | None:
        """JSON file for diagnosis sessions; sessions stay in memory when unset."""
        return get_secret("HEALTHASSIST_SESSION_STORE")

    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", settings.log_level)
