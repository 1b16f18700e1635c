# tests/conftest.py
import pytest
import copy

from domain.handler_chain import Handler
from domain.object_pool import HandlePool
from domain.id_generators import SequentialIdGenerator
from domain.severity import Severity
from domain.sinks import MemorySink


@pytest.fixture(scope="session")
def mock_config():
    """Provides a session-wide mock configuration dictionary."""
    return {
        "pool": {
            "id_policy": "sequential",
            "id_prefix": "",
            "seed": 12345,
            "max_size": None,
        },
        "logging": {
            "profile": "UAT",
            "file_path": "unused.log",
            "email_recipients": ["ops@example.com"],
            "level": "WARNING",
        },
        "console": {"max_log_lines": 5},
    }


@pytest.fixture
def config_factory(mock_config, monkeypatch):
    """
    Provides a function that installs a config object with optional
    per-section overrides into the service module.
    """

    def _install(**overrides):
        config_data = copy.deepcopy(mock_config)
        for section, values in overrides.items():
            config_data.setdefault(section, {}).update(values)

        class MockConfig:
            data = config_data

            def get(self, *keys, default=None):
                value = self.data
                try:
                    for key in keys:
                        value = value[key]
                    return value
                except (KeyError, TypeError):
                    return default

        monkeypatch.setattr("application.pool_service.config", MockConfig())
        return config_data

    return _install


@pytest.fixture
def pool():
    """A pool with sequential integer ids starting at 1."""
    return HandlePool(id_generator=SequentialIdGenerator())


@pytest.fixture
def sinks():
    """One MemorySink per position in a three-node chain."""
    return {"console": MemorySink(), "file": MemorySink(), "email": MemorySink()}


@pytest.fixture
def three_node_chain(sinks):
    """DEBUG -> ERROR -> FATAL, each writing to its own MemorySink."""
    head = Handler(Severity.DEBUG, sinks["console"], name="console")
    head.set_next(Handler(Severity.ERROR, sinks["file"], name="file")).set_next(
        Handler(Severity.FATAL, sinks["email"], name="email")
    )
    return head
