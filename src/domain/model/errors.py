"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class EmptyInputError(ValidationError):
    """User submitted blank or whitespace-only text."""


class EmptyQueryError(EmptyInputError):
    """Dictionary lookup was requested with a blank query."""


class RequestInFlightError(EmptyInputError):
    """A request is already in flight for this conversation session."""


class NoScenarioSelectedError(ValidationError):
    """A message was sent before any scenario was selected."""


class GatewayError(DomainError):
    """The AI call errored or returned unparsable data."""


class ImportFormatError(DomainError):
    """Imported backup document is not valid JSON or has the wrong shape."""


class UnsupportedCapabilityError(DomainError):
    """The platform lacks the requested capability (e.g. speech recognition)."""


class RecognitionBusyError(DomainError):
    """Speech recognition was started while another recognition is active."""


class SessionStateError(DomainError):
    """Operation is not allowed in the session's current state."""


class StorageError(DomainError):
    """The study library could not be read or written."""
