# domain/sinks.py

import os
import sys

from .severity import Colors


class ConsoleSink:
    """Writes each message as one line to a text stream."""

    def __init__(self, stream=None, color=None):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def write(self, message: str):
        self.stream.write(Colors.wrap(self.color, message) + "\n")
        self.stream.flush()


class FileSink:
    """Appends each message as one line to a UTF-8 text file."""

    def __init__(self, path):
        self.path = path

    def write(self, message: str):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(message + "\n")


class EmailSink:
    """
    Turns each message into an email-shaped dict.

    The actual delivery is left to `transport`, a callable that receives the
    dict. Every message is also kept in `outbox`.
    """

    def __init__(self, recipients, transport=None, subject="Log alert"):
        if not recipients:
            raise ValueError("EmailSink needs at least one recipient.")
        self.recipients = list(recipients)
        self.transport = transport
        self.subject = subject
        self.outbox = []

    def write(self, message: str):
        email = {
            "to": list(self.recipients),
            "subject": self.subject,
            "body": message,
        }
        self.outbox.append(email)
        if self.transport is not None:
            self.transport(email)


class MemorySink:
    """Keeps messages in a list. Used by the console and in tests."""

    def __init__(self):
        self.messages = []

    def write(self, message: str):
        self.messages.append(message)
