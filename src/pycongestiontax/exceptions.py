"""Library exceptions."""

from __future__ import annotations


class PyCongestionTaxError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        if text is None:
            super().__init__()
        else:
            super().__init__(text)
        self.error_code = error_code if error_code is not None else self.default_error_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message


class ValidationError(PyCongestionTaxError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class TimestampError(ValidationError):
    """Raised when a passage timestamp does not match the expected format."""

    default_error_code = "invalid_timestamp"


class RuleNotFoundError(PyCongestionTaxError):
    """Raised when no rule set is known for a city."""

    error_type = "not_found"
    default_error_code = "rule_not_found"


class ConfigError(PyCongestionTaxError):
    """Raised when a rule document is invalid."""

    error_type = "config"
    default_error_code = "config_error"


class RuleSourceError(PyCongestionTaxError):
    """Raised when a remote rule source returns an error."""

    error_type = "rule_source"
    default_error_code = "rule_source_error"


class NetworkError(PyCongestionTaxError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"
