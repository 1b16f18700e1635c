# tests/test_pool_service.py
import pytest
from unittest.mock import MagicMock, Mock, call

from application.pool_service import PoolService
from domain.chain_factory import ChainProfile
from domain.id_generators import RandomIdGenerator


@pytest.fixture
def service(config_factory, sinks):
    """A UAT service whose sinks are all in-memory."""
    config_factory(console={"max_log_lines": 50})
    return PoolService(
        console_sink=sinks["console"],
        file_sink=sinks["file"],
        email_sink=sinks["email"],
    )


class TestConstruction:
    def test_builds_chain_for_configured_profile(self, service):
        assert service.profile is ChainProfile.UAT
        assert [name for name, _ in service.get_render_data()["chain"]] == [
            "console",
            "file",
            "email",
        ]

    def test_debug_profile_skips_email(self, config_factory, sinks):
        config_factory(logging={"profile": "DEBUG"})
        service = PoolService(console_sink=sinks["console"], file_sink=sinks["file"])
        assert [node.name for node in service.chain] == ["console", "file"]

    def test_uat_builds_default_email_sink_that_reports_to_log(
        self, config_factory, sinks
    ):
        config_factory(console={"max_log_lines": 50})
        service = PoolService(console_sink=sinks["console"], file_sink=sinks["file"])
        email_node = service.chain.tail()

        service.log("fatal", "reactor offline")

        assert email_node.name == "email"
        assert any("ops@example.com" in line for line in service.log_messages)

    def test_random_id_policy(self, config_factory, sinks):
        config_factory(pool={"id_policy": "random", "seed": 7})
        service = PoolService(
            console_sink=sinks["console"],
            file_sink=sinks["file"],
            email_sink=sinks["email"],
        )
        handle = service.acquire()
        assert handle.id == RandomIdGenerator(seed=7)()

    def test_max_size_from_config(self, config_factory, sinks):
        config_factory(pool={"max_size": 1})
        service = PoolService(
            console_sink=sinks["console"],
            file_sink=sinks["file"],
            email_sink=sinks["email"],
        )
        service.execute_user_command("acquire")
        service.execute_user_command("acquire")
        assert service.pool.size == 1
        assert "Command failed" in service.log_messages[-1]

    def test_initialize_adds_welcome_messages(self, service):
        service.initialize()
        assert "Welcome" in service.log_messages[0]
        assert "console -> file -> email" in service.log_messages[1]


class TestPoolCommands:
    def test_acquire_release_cycle(self, service):
        service.execute_user_command("acquire")
        service.execute_user_command("release 1")
        data = service.get_render_data()
        assert data["available_ids"] == [1]
        assert data["in_use_ids"] == []

    def test_short_aliases(self, service):
        service.execute_user_command("a")
        service.execute_user_command("a")
        service.execute_user_command("r 2")
        service.execute_user_command("t 2")
        data = service.get_render_data()
        assert data["in_use_ids"] == [1]
        assert data["stats"]["terminated"] == 1

    def test_terminate_in_use_logs_error_and_keeps_handle(self, service):
        service.execute_user_command("acquire")
        service.execute_user_command("terminate 1")
        assert "in use" in service.log_messages[-1]
        assert service.get_render_data()["in_use_ids"] == [1]

    def test_terminate_unknown_logs_not_found(self, service):
        assert service.terminate(99) is False
        assert "not managed" in service.log_messages[-1]

    def test_release_of_idle_handle_is_reported_not_raised(self, service):
        service.execute_user_command("release 5")
        assert "nothing to release" in service.log_messages[-1]

    def test_string_ids_are_kept_as_strings(self, config_factory, sinks):
        config_factory(pool={"id_prefix": "w"})
        service = PoolService(
            console_sink=sinks["console"],
            file_sink=sinks["file"],
            email_sink=sinks["email"],
        )
        service.execute_user_command("acquire")
        service.execute_user_command("release w1")
        assert service.get_render_data()["available_ids"] == ["w1"]

    def test_console_ids_are_resolved_through_get_handle(self, service, monkeypatch):
        lookup = Mock(wraps=service.pool.get_handle)
        monkeypatch.setattr(service.pool, "get_handle", lookup)
        service.execute_user_command("acquire")

        service.execute_user_command("release 1")
        service.execute_user_command("terminate 1")

        assert lookup.call_args_list == [call(1), call(1)]
        assert service.pool.size == 0

    def test_release_of_idle_handle_keeps_it_available(self, service):
        service.execute_user_command("acquire")
        service.execute_user_command("release 1")
        service.execute_user_command("release 1")
        assert "nothing to release" in service.log_messages[-1]
        assert service.get_render_data()["available_ids"] == [1]

    def test_status(self, service):
        service.execute_user_command("acquire")
        service.execute_user_command("status")
        assert "1 in use" in service.log_messages[-1]


class TestLogCommands:
    def test_log_routes_to_matching_sink(self, service, sinks):
        service.execute_user_command("log error disk almost full")
        assert sinks["file"].messages == ["disk almost full"]
        assert "-> file" in service.log_messages[-1]

    def test_log_unmatched_severity_is_reported(self, service, sinks):
        service.execute_user_command("log warning careful")
        assert all(sink.messages == [] for sink in sinks.values())
        assert "no handler" in service.log_messages[-1]

    def test_log_unknown_severity_is_reported(self, service):
        service.execute_user_command("log loud hello")
        assert "Unknown severity" in service.log_messages[-1]

    def test_sink_failure_is_logged_and_returned(self, config_factory, sinks):
        config_factory(console={"max_log_lines": 50})
        broken_file = MagicMock()
        broken_file.write.side_effect = OSError("disk full")
        service = PoolService(
            console_sink=sinks["console"],
            file_sink=broken_file,
            email_sink=sinks["email"],
        )
        failures = service.log("error", "x")
        assert len(failures) == 1
        assert "Sink error" in service.log_messages[-1]


class TestCommandParsing:
    def test_empty_command_is_ignored(self, service):
        service.execute_user_command("   ")
        assert service.log_messages == []

    def test_unknown_command(self, service):
        service.execute_user_command("fly away")
        assert "Unknown command" in service.log_messages[-1]

    def test_release_without_id_is_unknown(self, service):
        service.execute_user_command("release")
        assert "Unknown command" in service.log_messages[-1]

    def test_help(self, service):
        service.execute_user_command("help")
        assert "acquire" in service.log_messages[-1]


def test_log_buffer_is_bounded(config_factory, sinks):
    config_factory()  # max_log_lines == 5
    service = PoolService(
        console_sink=sinks["console"],
        file_sink=sinks["file"],
        email_sink=sinks["email"],
    )
    for _ in range(8):
        service.execute_user_command("acquire")
    assert len(service.log_messages) == 5
    assert "handle 8" in service.log_messages[-1]


def test_render_data_comes_from_one_pool_snapshot(service, monkeypatch):
    snapshot = Mock(
        return_value={"available_ids": [2], "in_use_ids": [1], "stats": {"total": 2}}
    )
    monkeypatch.setattr(service.pool, "snapshot", snapshot)

    data = service.get_render_data()

    snapshot.assert_called_once_with()
    assert data["available_ids"] == [2]
    assert data["in_use_ids"] == [1]
    assert data["stats"] == {"total": 2}
    assert data["profile"] == "UAT"
