# domain/handler_chain.py

import logging

from .errors import SinkWriteError
from .severity import Severity

logger = logging.getLogger(__name__)


def _as_write(sink):
    """Prefers the sink's `write` method, falling back to the sink itself."""
    write = getattr(sink, "write", None)
    if callable(write):
        return write
    if callable(sink):
        return sink
    raise TypeError(f"Sink must be callable or have a write() method: {sink!r}")


class Handler:
    """
    One link in a severity-filtered chain.

    A handler writes a message to its sink only when the message severity
    equals its own threshold, then always forwards to the next handler.
    """

    def __init__(self, threshold, sink, name=None):
        self.threshold = Severity.parse(threshold)
        self._write = _as_write(sink)
        self.name = name or self.threshold.name.lower()
        self.next = None
        # The handler whose `next` points here; a node has at most one.
        self._owner = None

    def set_next(self, handler: "Handler") -> "Handler":
        """
        Attaches the successor and returns it, so calls can be chained:
        head.set_next(b).set_next(c). Keep a reference to the head yourself.
        """
        if self.next is not None:
            raise ValueError(f"Handler '{self.name}' already has a successor.")
        if handler._owner is not None:
            raise ValueError(
                f"Handler '{handler.name}' already follows '{handler._owner.name}'."
            )
        if any(node is self for node in handler):
            raise ValueError(f"Attaching '{handler.name}' would create a cycle.")
        self.next = handler
        handler._owner = self
        return handler

    def handles(self, severity) -> bool:
        return Severity.parse(severity) == self.threshold

    def log(self, severity, message: str) -> list:
        """
        Walks the chain from this handler to the tail, writing to every
        handler whose threshold equals `severity`.

        Returns:
            list[SinkWriteError]: failures from individual sinks. A failing
            sink never stops the walk.
        """
        severity = Severity.parse(severity)
        failures = []
        for node in self:
            if node.threshold != severity:
                continue
            try:
                node._write(message)
            except Exception as e:
                failure = SinkWriteError(node, message, e)
                logger.error("%s", failure)
                failures.append(failure)
        return failures

    def __iter__(self):
        node = self
        while node is not None:
            yield node
            node = node.next

    def tail(self) -> "Handler":
        node = self
        while node.next is not None:
            node = node.next
        return node

    def matching(self, severity) -> list:
        severity = Severity.parse(severity)
        return [node for node in self if node.threshold == severity]

    def thresholds(self) -> list:
        return [node.threshold for node in self]

    def __repr__(self):
        return f"Handler({self.threshold.name}, name={self.name!r})"
