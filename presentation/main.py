# presentation/main.py

import logging

from application.pool_service import PoolService
from application.config import config, log_level
from presentation.renderer import display

QUIT_COMMANDS = ("q", "quit", "exit")


def command_loop(service, read_command=input, render=display):
    """
    Reads commands until the user quits or input runs out, re-rendering
    after each one.
    """
    render(service.get_render_data())
    while True:
        try:
            command = read_command("> ")
        except EOFError:
            break
        if command.strip().lower() in QUIT_COMMANDS:
            break
        service.execute_user_command(command)
        render(service.get_render_data())


def configure_logging(logging_settings: dict):
    logging.basicConfig(
        level=log_level(logging_settings.get("level")),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run():
    """Initializes and runs the console application."""
    configure_logging(config.section("logging"))

    service = PoolService()
    service.initialize()

    try:
        command_loop(service)
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
