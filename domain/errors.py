# domain/errors.py


class PoolError(Exception):
    """Base class for errors raised by the handle pool."""


class ResourceInUseError(PoolError):
    """Raised when terminating a handle that is still checked out."""

    def __init__(self, handle):
        super().__init__(f"Handle {handle.id} is in use and cannot be terminated.")
        self.handle = handle


class HandleNotFoundError(PoolError, KeyError):
    """Raised when an operation targets a handle the pool does not hold."""

    def __init__(self, handle_id):
        super().__init__(handle_id)
        self.handle_id = handle_id

    def __str__(self):
        return f"Handle {self.handle_id} is not managed by this pool."


class PoolExhaustedError(PoolError):
    """Raised by a bounded pool when every handle is checked out."""


class IdCollisionError(PoolError):
    """Raised when the id generator keeps producing ids that are already live."""


class SinkWriteError(Exception):
    """A single handler's sink failed. Other handlers are unaffected."""

    def __init__(self, handler, message, cause):
        super().__init__(
            f"{handler.threshold.name} sink failed to write '{message}': {cause}"
        )
        self.handler = handler
        self.message = message
        self.cause = cause
