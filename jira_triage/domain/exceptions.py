"""Domain exceptions."""


class TriageError(Exception):
    """Base class for errors raised while triaging a ticket."""


class InvalidTicketError(TriageError):
    """The webhook payload cannot be turned into a ticket (e.g. no issue key).

    This is a request-level failure: the whole request is aborted.
    """


class BackendUnavailableError(TriageError):
    """A backend call returned no usable text."""
