# domain/object_pool.py

import logging
import threading
from collections import OrderedDict

from .errors import (
    HandleNotFoundError,
    IdCollisionError,
    PoolExhaustedError,
    ResourceInUseError,
)
from .id_generators import SequentialIdGenerator

logger = logging.getLogger(__name__)


class PooledHandleMixin:
    """
    Gives a pooled object a link back to the HandlePool that created it.

    The pool sets `pool` when it creates the object and clears it on
    terminate, so a terminated handle can no longer reach the pool.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pool = None

    @property
    def is_checked_out(self) -> bool:
        return self.pool is not None and self.pool.is_in_use(self)

    def release(self):
        """Checks this handle back in to its pool."""
        if self.pool is None:
            raise RuntimeError(f"{self!r} does not belong to a pool.")
        self.pool.release(self)


class WorkerHandle(PooledHandleMixin):
    """An opaque, reusable token handed out by a HandlePool."""

    def __init__(self, handle_id):
        super().__init__()
        self.id = handle_id

    def __eq__(self, other):
        if not isinstance(other, WorkerHandle):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"WorkerHandle({self.id!r})"


class HandlePool:
    """
    Hands out reusable worker handles and recycles them on release.

    Every handle lives in exactly one of two collections: `available` (idle,
    FIFO order) or `in_use` (checked out). New handles are only created when
    nothing is available.

    Operations accept either a WorkerHandle or a bare id. A WorkerHandle only
    matches the exact object the pool holds under its id, so a terminated
    handle, or one from another pool, never acts on a live handle that
    happens to share its id.

    Every public method and property takes the pool lock.
    """

    MAX_ID_ATTEMPTS = 16

    def __init__(self, id_generator=None, max_size=None):
        """
        Initializes the pool.

        Args:
            id_generator (callable): A no-argument function returning a new
                                     handle id. Defaults to sequential integers.
            max_size (int | None): Optional cap on the total population. When
                                   None the pool grows without bound.
        """
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._id_generator = id_generator or SequentialIdGenerator()
        self.max_size = max_size
        self._available = OrderedDict()
        self._in_use = OrderedDict()
        self._lock = threading.Lock()
        self._created_count = 0
        self._terminated_count = 0

    # --- Helpers, called with the lock held ---

    @staticmethod
    def _find(collection, handle):
        """Returns the key of `handle` in `collection`, or None."""
        if isinstance(handle, WorkerHandle):
            if collection.get(handle.id) is handle:
                return handle.id
            return None
        return handle if handle in collection else None

    def _population(self) -> int:
        return len(self._available) + len(self._in_use)

    def _new_id(self):
        for _ in range(self.MAX_ID_ATTEMPTS):
            candidate = self._id_generator()
            if candidate not in self._available and candidate not in self._in_use:
                return candidate
            logger.debug("Id %r is already live, regenerating.", candidate)
        raise IdCollisionError(
            f"Could not generate a unique handle id after {self.MAX_ID_ATTEMPTS} attempts."
        )

    # --- Operations ---

    def acquire(self) -> WorkerHandle:
        """
        Checks out a handle.

        The oldest available handle is reused if there is one. Otherwise a new
        handle is created with a fresh id and goes straight to in-use.

        Returns:
            The checked-out WorkerHandle.
        """
        with self._lock:
            if self._available:
                _, handle = self._available.popitem(last=False)
            else:
                if self.max_size is not None and self._population() >= self.max_size:
                    raise PoolExhaustedError(
                        f"All {self.max_size} handles are in use."
                    )
                handle = WorkerHandle(self._new_id())
                handle.pool = self
                self._created_count += 1
                logger.debug("Created handle %r.", handle.id)
            self._in_use[handle.id] = handle
            return handle

    def release(self, handle):
        """
        Returns a checked-out handle to the back of the available queue.

        Releasing a handle that is not checked out does nothing.
        """
        with self._lock:
            key = self._find(self._in_use, handle)
            if key is None:
                logger.debug("Release of %r ignored: not in use.", handle)
                return
            self._available[key] = self._in_use.pop(key)

    def terminate(self, handle):
        """
        Permanently removes an idle handle from the pool.

        Raises:
            ResourceInUseError: The handle is still checked out.
            HandleNotFoundError: The pool does not hold the handle.
        """
        with self._lock:
            key = self._find(self._in_use, handle)
            if key is not None:
                logger.warning("Refusing to terminate handle %r: in use.", key)
                raise ResourceInUseError(self._in_use[key])
            key = self._find(self._available, handle)
            if key is None:
                raise HandleNotFoundError(getattr(handle, "id", handle))
            removed = self._available.pop(key)
            removed.pool = None
            self._terminated_count += 1
            logger.debug("Terminated handle %r.", key)

    def get_handle(self, handle_id) -> WorkerHandle:
        """Looks up a live handle by id."""
        with self._lock:
            if handle_id in self._in_use:
                return self._in_use[handle_id]
            if handle_id in self._available:
                return self._available[handle_id]
        raise HandleNotFoundError(handle_id)

    def is_in_use(self, handle) -> bool:
        with self._lock:
            return self._find(self._in_use, handle) is not None

    # --- Introspection ---

    @property
    def available(self) -> tuple:
        with self._lock:
            return tuple(self._available.values())

    @property
    def in_use(self) -> tuple:
        with self._lock:
            return tuple(self._in_use.values())

    @property
    def size(self) -> int:
        with self._lock:
            return self._population()

    def __len__(self):
        return self.size

    def __contains__(self, handle):
        with self._lock:
            return (
                self._find(self._available, handle) is not None
                or self._find(self._in_use, handle) is not None
            )

    def _stats(self) -> dict:
        return {
            "available": len(self._available),
            "in_use": len(self._in_use),
            "total": self._population(),
            "created": self._created_count,
            "terminated": self._terminated_count,
        }

    def stats(self) -> dict:
        with self._lock:
            return self._stats()

    def snapshot(self) -> dict:
        """Available ids, in-use ids and stats, all read under one lock."""
        with self._lock:
            return {
                "available_ids": list(self._available),
                "in_use_ids": list(self._in_use),
                "stats": self._stats(),
            }
