"""Error kinds reported by persistence and export operations."""


class ExplorerError(Exception):
    """Base class for failures surfaced to the caller of a session."""


class IOFailure(ExplorerError):
    """A file could not be read or written."""


class DeserializationFailure(ExplorerError):
    """A snapshot was readable but did not describe a valid view state."""
