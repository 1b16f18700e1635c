# domain/severity.py

from enum import IntEnum


class Colors:
    """ANSI codes for the console. `wrap` resets the color after the text."""

    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    @classmethod
    def wrap(cls, color, text) -> str:
        return f"{color}{text}{cls.RESET}" if color else str(text)


class Severity(IntEnum):
    """Totally ordered message severities, lowest first."""

    TRACE = 0
    INFO = 1
    DEBUG = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def parse(cls, name) -> "Severity":
        """
        Accepts a Severity, its integer value (4, "4"), or its name in any
        case ('error', 'Fatal').
        """
        if isinstance(name, cls):
            return name
        text = str(name).strip()
        try:
            if isinstance(name, int) and not isinstance(name, bool):
                return cls(name)
            if text.isdigit():
                return cls(int(text))
            return cls[text.upper()]
        except (KeyError, ValueError):
            valid = ", ".join(level.name for level in cls)
            raise ValueError(f"Unknown severity: '{name}'. Use one of: {valid}")


SEVERITY_COLORS = {
    Severity.TRACE: Colors.WHITE,
    Severity.INFO: Colors.GREEN,
    Severity.DEBUG: Colors.CYAN,
    Severity.WARNING: Colors.YELLOW,
    Severity.ERROR: Colors.RED,
    Severity.FATAL: Colors.MAGENTA,
}
