"""Error taxonomy shared by every layer of the workflow core.

Each exception carries a stable ``code`` that the transport layer reports
verbatim, so clients can branch on the kind of failure without parsing
messages.
"""


class WorkflowError(Exception):
    """Base exception for the meal workflow core."""

    code = "INTERNAL_ERROR"


class UnauthenticatedError(WorkflowError):
    """No caller identity, or the supplied credentials are invalid."""

    code = "UNAUTHENTICATED"


class ForbiddenError(WorkflowError):
    """Caller is authenticated but their role does not allow the action."""

    code = "FORBIDDEN"


class NotFoundError(WorkflowError):
    """Referenced entity is absent or inactive.

    Soft-deleted and missing entities are reported identically.
    """

    code = "NOT_FOUND"


class PersistenceError(WorkflowError):
    """The underlying store failed. Never retried by the core."""

    code = "INTERNAL_ERROR"
