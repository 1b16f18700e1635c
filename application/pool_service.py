# application/pool_service.py
from domain.chain_factory import ChainProfile, build_chain
from domain.errors import HandleNotFoundError, PoolError
from domain.id_generators import make_id_generator
from domain.object_pool import HandlePool
from domain.severity import Colors, Severity, SEVERITY_COLORS
from domain.sinks import ConsoleSink, EmailSink, FileSink
from .config import config

HELP_TEXT = (
    "Commands: acquire | release <id> | terminate <id> | "
    "log <severity> <message> | status | help | q"
)


def _parse_handle_id(text: str):
    """Ids typed at the prompt are ints when they look like ints."""
    try:
        return int(text)
    except ValueError:
        return text


class PoolService:
    """
    Hosts one handle pool and one handler chain, and translates text
    commands into calls on them.
    """

    def __init__(self, console_sink=None, file_sink=None, email_sink=None):
        self.log_messages = []
        self._max_log_lines = config.get("console", "max_log_lines", default=99)

        id_generator = make_id_generator(
            config.get("pool", "id_policy", default="sequential"),
            seed=config.get("pool", "seed"),
            prefix=config.get("pool", "id_prefix", default=""),
        )
        self.pool = HandlePool(
            id_generator=id_generator,
            max_size=config.get("pool", "max_size"),
        )

        self.profile = ChainProfile.parse(
            config.get("logging", "profile", default="DEBUG")
        )
        if console_sink is None:
            console_sink = ConsoleSink(color=Colors.CYAN)
        if file_sink is None:
            file_sink = FileSink(
                config.get("logging", "file_path", default="handler_chain.log")
            )
        if email_sink is None and self.profile is ChainProfile.UAT:
            email_sink = EmailSink(
                config.get("logging", "email_recipients", default=["ops@localhost"]),
                transport=self._deliver_email,
            )
        self.chain = build_chain(self.profile, console_sink, file_sink, email_sink)

    def initialize(self):
        """Add initial welcome messages."""
        self.add_log("Welcome to the handle pool console!")
        self.add_log(
            f"Handler chain profile: {self.profile.value} "
            f"({' -> '.join(node.name for node in self.chain)})"
        )
        self.add_log(HELP_TEXT)

    def add_log(self, message):
        self.log_messages.append(message)
        if len(self.log_messages) > self._max_log_lines:
            self.log_messages.pop(0)

    def _deliver_email(self, email):
        self.add_log(
            f"{Colors.MAGENTA}Email to {', '.join(email['to'])}: "
            f"{email['body']}{Colors.RESET}"
        )

    # --- Pool commands ---

    def acquire(self):
        handle = self.pool.acquire()
        self.add_log(f"{Colors.GREEN}Acquired handle {handle.id}.{Colors.RESET}")
        return handle

    def release(self, handle_id):
        try:
            handle = self.pool.get_handle(handle_id)
        except HandleNotFoundError:
            handle = None
        if handle is None or not handle.is_checked_out:
            self.add_log(
                f"{Colors.YELLOW}Handle {handle_id} is not checked out; "
                f"nothing to release.{Colors.RESET}"
            )
            return
        handle.release()
        self.add_log(f"Released handle {handle_id}.")

    def terminate(self, handle_id):
        try:
            self.pool.terminate(self.pool.get_handle(handle_id))
            self.add_log(f"{Colors.GREEN}Terminated handle {handle_id}.{Colors.RESET}")
            return True
        except PoolError as e:
            self.add_log(f"{Colors.RED}Command failed: {e}{Colors.RESET}")
            return False

    # --- Chain commands ---

    def log(self, severity, message: str):
        severity = Severity.parse(severity)
        failures = self.chain.log(severity, message)
        matched = [node.name for node in self.chain.matching(severity)]
        color = SEVERITY_COLORS[severity]
        if matched:
            self.add_log(
                f"{color}[{severity.name}]{Colors.RESET} {message} "
                f"-> {', '.join(matched)}"
            )
        else:
            self.add_log(
                f"{color}[{severity.name}]{Colors.RESET} {message} "
                f"-> no handler for this severity"
            )
        for failure in failures:
            self.add_log(f"{Colors.RED}Sink error: {failure}{Colors.RESET}")
        return failures

    def execute_user_command(self, command_text: str):
        """Parses and executes commands, handling domain exceptions."""
        parts = command_text.strip().split()
        if not parts:
            return

        command = parts[0].lower()

        try:
            if command in ("acquire", "a") and len(parts) == 1:
                self.acquire()
            elif command in ("release", "r") and len(parts) == 2:
                self.release(_parse_handle_id(parts[1]))
            elif command in ("terminate", "t") and len(parts) == 2:
                self.terminate(_parse_handle_id(parts[1]))
            elif command == "log" and len(parts) >= 3:
                self.log(parts[1], " ".join(parts[2:]))
            elif command == "status" and len(parts) == 1:
                stats = self.pool.stats()
                self.add_log(
                    f"Pool: {stats['available']} available, {stats['in_use']} in use, "
                    f"{stats['created']} created, {stats['terminated']} terminated."
                )
            elif command == "help":
                self.add_log(HELP_TEXT)
            else:
                self.add_log(
                    f"{Colors.RED}Unknown command: '{command_text}'{Colors.RESET}"
                )
        except (PoolError, ValueError) as e:
            # The application layer catches domain errors and logs them
            self.add_log(f"{Colors.RED}Command failed: {e}{Colors.RESET}")

    def get_render_data(self) -> dict:
        """
        Provides all necessary data for the Presentation Layer to draw the console.
        """
        render_data = self.pool.snapshot()
        render_data.update({
            "profile": self.profile.value,
            "chain": [(node.name, node.threshold.name) for node in self.chain],
            "logs": self.log_messages,
            "colors": Colors,
        })
        return render_data
