"""Domain errors raised by the training store and the Gemini relay."""


class InspectionRelayError(Exception):
    """Base class for application errors translated at the route boundary."""


class ValidationError(InspectionRelayError):
    """A client payload is missing required fields."""


class StorageReadError(InspectionRelayError):
    """The persisted training document is missing, unreadable, or malformed."""


class StorageWriteError(InspectionRelayError):
    """The training document could not be written to disk."""


class RelayError(InspectionRelayError):
    """The upstream inference call failed or returned an unparseable body."""
