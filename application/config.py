# application/config.py
import json
import os

CONFIG_ENV_VAR = "HANDLE_POOL_CONFIG"
DEFAULT_CONFIG_FILE = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config.json"
)


class Config:
    """
    Process-wide settings loaded once from a JSON file.

    The file is `$HANDLE_POOL_CONFIG` when set, otherwise the config.json at
    the project root. Later constructions return the same instance.
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_file=None):
        if getattr(self, "_initialized", False):
            return
        self.path = config_file or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
        with open(self.path, "r", encoding="utf-8") as f:
            self.data = json.load(f)
        self._initialized = True

    def get(self, *keys, default=None):
        """
        Access nested configuration values.
        Example: config.get('pool', 'id_policy')
        """
        value = self.data
        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def section(self, name) -> dict:
        """A copy of one top-level section, empty when it is missing."""
        value = self.data.get(name)
        return dict(value) if isinstance(value, dict) else {}


def log_level(name, default="WARNING") -> str:
    """Normalises a configured level name ('warning' -> 'WARNING')."""
    return str(name or default).strip().upper()


config = Config()
