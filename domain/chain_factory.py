# domain/chain_factory.py

from enum import Enum

from .handler_chain import Handler
from .severity import Severity


class ChainProfile(Enum):
    UAT = "UAT"
    DEBUG = "DEBUG"

    @classmethod
    def parse(cls, name) -> "ChainProfile":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown chain profile: '{name}'")


def build_chain(profile, console, file, email=None) -> Handler:
    """
    Assembles the handler chain for a deployment profile and returns its head.

    UAT:   console(DEBUG) -> file(ERROR) -> email(FATAL)
    DEBUG: console(DEBUG) -> file(ERROR)
    """
    profile = ChainProfile.parse(profile)

    head = Handler(Severity.DEBUG, console, name="console")
    tail = head.set_next(Handler(Severity.ERROR, file, name="file"))

    if profile is ChainProfile.UAT:
        if email is None:
            raise ValueError("The UAT profile requires an email sink.")
        tail.set_next(Handler(Severity.FATAL, email, name="email"))

    return head
