"""Error taxonomy shared by the table clients and the entity stores."""


class BackendError(RuntimeError):
    """A remote table call failed (transport, HTTP status, or SQL error)."""


class OperationError(RuntimeError):
    """A store mutation failed.

    Carries a human-readable message suitable for a notification. The
    underlying exception is chained on ``__cause__``.
    """
