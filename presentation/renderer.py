# presentation/renderer.py
import re
import shutil
import sys

# --- Constants for layout ---
MIN_WIDTH = 60
LOG_LINES = 12
PANEL_SEPARATOR = " | "


def get_visible_length(s: str) -> int:
    """Calculates the visible length of a string by removing ANSI escape codes."""
    return len(re.sub(r"\033\[[0-9;]*m", "", s))


def pad_visible(s: str, width: int) -> str:
    return s + " " * max(0, width - get_visible_length(s))


def _format_ids(ids: list, limit: int) -> str:
    if not ids:
        return "(none)"
    shown = [str(handle_id) for handle_id in ids[:limit]]
    if len(ids) > limit:
        shown.append(f"+{len(ids) - limit} more")
    return ", ".join(shown)


def _render_header(render_data: dict, terminal_width: int) -> list[str]:
    stats = render_data["stats"]
    chain = " -> ".join(
        f"{name}({threshold})" for name, threshold in render_data.get("chain", [])
    )
    title = (
        f"--- Handle Pool --- | Total: {stats['total']} | "
        f"Created: {stats['created']} | Terminated: {stats['terminated']}"
    )
    return [
        title[:terminal_width],
        f"Chain [{render_data.get('profile', '?')}]: {chain}"[:terminal_width],
    ]


def _render_pool_panels(render_data: dict, terminal_width: int) -> list[str]:
    Colors = render_data["colors"]
    column_width = max(20, (terminal_width - len(PANEL_SEPARATOR)) // 2)
    id_limit = max(1, column_width // 6)
    left = [
        f"{Colors.GREEN}Available ({len(render_data['available_ids'])}){Colors.RESET}",
        _format_ids(render_data["available_ids"], id_limit),
    ]
    right = [
        f"{Colors.YELLOW}In use ({len(render_data['in_use_ids'])}){Colors.RESET}",
        _format_ids(render_data["in_use_ids"], id_limit),
    ]
    return [
        pad_visible(left_line, column_width) + PANEL_SEPARATOR + right_line
        for left_line, right_line in zip(left, right)
    ]


def _render_footer(render_data: dict, terminal_width: int) -> list[str]:
    """Renders the log panel and the command hint."""
    buffer = ["-" * terminal_width, "--- Log ---"]
    display_logs = render_data.get("logs", [])[-LOG_LINES:]
    buffer.extend(display_logs)
    buffer.append("-" * terminal_width)
    buffer.append(
        "Cmd: acquire | release <id> | terminate <id> | log <severity> <msg> | q(quit)"
    )
    return buffer


def render_lines(render_data: dict, terminal_width: int) -> list[str]:
    terminal_width = max(MIN_WIDTH, terminal_width)
    output_buffer = []
    output_buffer.extend(_render_header(render_data, terminal_width))
    output_buffer.extend(_render_pool_panels(render_data, terminal_width))
    output_buffer.extend(_render_footer(render_data, terminal_width))
    return output_buffer


def display(render_data: dict, stream=None):
    stream = stream if stream is not None else sys.stdout
    terminal_width = shutil.get_terminal_size().columns
    lines = render_lines(render_data, terminal_width)
    stream.write("\n".join(lines) + "\n")
    stream.flush()
