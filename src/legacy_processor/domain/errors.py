"""Failure taxonomy for challenge reconciliation."""

from __future__ import annotations


class LegacyProcessorError(RuntimeError):
    """Base class for every failure raised while reconciling a challenge."""


class SchemaValidationError(LegacyProcessorError):
    """Raised when an inbound message does not match its schema."""

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class PayloadValidationError(LegacyProcessorError):
    """Raised when a payload is well-formed but semantically incomplete."""


class MissingProjectError(PayloadValidationError):
    """No legacy project id could be resolved for the challenge."""


class MissingSubmissionPhaseError(PayloadValidationError):
    """Phases were supplied without a submission phase."""


class MissingPrizesError(PayloadValidationError):
    """Prize sets were supplied without a challenge prizes set."""


class MissingWinnerError(PayloadValidationError):
    """A task cannot be closed without a first-placed winner."""


class RemoteCallError(LegacyProcessorError):
    """Raised when a remote API call fails; carries the remote system's message."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(RemoteCallError):
    """Raised when a lookup finds nothing upstream."""


class AuthenticationError(LegacyProcessorError):
    """Raised when no machine-to-machine token could be obtained."""


class LegacyUnavailableError(LegacyProcessorError):
    """Raised when the legacy record cannot be read back yet."""

    def __init__(self, legacy_id: int, reason: str) -> None:
        super().__init__(f"Legacy challenge {legacy_id} is not available: {reason}")
        self.legacy_id = legacy_id
        self.reason = reason
