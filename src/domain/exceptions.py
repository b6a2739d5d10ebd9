"""
domain.exceptions - Custom exception hierarchy for ENS Savant.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class ConfigurationError(DomainError):
    """Raised when required settings are missing from the environment."""

    def __init__(self, missing: list[str], message: str = ""):
        self.missing = list(missing)
        super().__init__(
            message or "Required environment variables are not set: " + ", ".join(self.missing)
        )


class InvalidHoursError(DomainError, ValueError):
    """Raised when an 'hours' window is non-numeric or not positive."""


class RegistrationFetchError(DomainError):
    """Raised when paging through name registrations fails."""


class SubgraphError(RegistrationFetchError):
    """Raised when the subgraph API call fails (transport, HTTP or GraphQL)."""


class TextRecordLookupError(DomainError):
    """Raised when the ENS text-record lookup fails."""


class AgentInitializationError(DomainError):
    """Raised when the LLM + wallet agent cannot be constructed."""
