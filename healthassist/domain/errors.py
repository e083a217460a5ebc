"""Error types raised across the diagnosis domain and session service."""


class HealthAssistError(Exception):
    """Base error. ``status_code`` is the HTTP status a host should answer with."""

    status_code = 500


class InvalidInputError(HealthAssistError):
    """The caller supplied no symptoms or a malformed diagnosis request."""

    status_code = 400


class ComputationFault(HealthAssistError):
    """Unexpected failure while scoring; masked by the fallback result."""


class SessionValidationError(HealthAssistError):
    status_code = 400


class SessionNotFoundError(HealthAssistError):
    status_code = 404

    def __init__(self, session_id: str):
        super().__init__("Diagnosis session not found")
        self.session_id = session_id
