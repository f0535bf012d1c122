"""Application-level exceptions.

Classes:
    EphemeralPasteError:
        Base class for every application-specific error.

    ValidationError:
        Raised when paste input falls outside the documented shape or ranges.
        Carries the full list of problems found in `errors`.

    PasteNotFoundError:
        Raised when a paste cannot be served. Never-created, time-expired and
        view-limit-exhausted pastes all raise this same error so a caller can't
        tell them apart.

    BackendUnavailableError:
        Raised when the configured store backend can't complete a call.

    ConfigurationError, BadConfigurationError:
        Raised when the application environment is incomplete or invalid.
"""


class EphemeralPasteError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:ephemeralpaste_error'


class ValidationError(EphemeralPasteError):
    """Raised when paste input is invalid."""

    error_code = 'paste:validation_error'

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class PasteNotFoundError(EphemeralPasteError):
    """Raised when a paste is absent, expired or out of views."""

    error_code = 'paste:not_found'


class BackendUnavailableError(EphemeralPasteError):
    """Raised when the store backend can't be reached."""

    error_code = 'paste:backend_unavailable'


class ConfigurationError(EphemeralPasteError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
