"""
Executes command scripts against a grid.
Lines are processed independently: a failing line is recorded and the
rest of the script still runs.
"""
from dataclasses import dataclass, field
from typing import List

from protocol.commands import COMMAND_REGISTRY, Command, CommandFailure, parse_command
from state.grid import GridStore
from utils.logger import get_logger

logger = get_logger(__name__)

REPORT_HEADER = "Commands failed:"


@dataclass
class ScriptResult:
    """Outcome of one command script."""
    executed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def report(self) -> str:
        """Aggregated failure report, one line per failed command ("" if none)."""
        if not self.errors:
            return ""
        return "\n".join([REPORT_HEADER] + self.errors)


def execute_command(store: GridStore, command: Command) -> None:
    """Dispatch a validated command to its rasterizer call."""
    COMMAND_REGISTRY[command.keyword].execute(store, command)


def process_script(store: GridStore, text: str) -> ScriptResult:
    """
    Run every command line in a script.

    Args:
        store: Grid to draw on
        text: Newline-separated command script

    Returns:
        ScriptResult with the number of executed commands and the error lines
    """
    result = ScriptResult()
    if not text:
        return result

    for line_number, line in enumerate(text.splitlines(), 1):
        command = parse_command(line, store.width, store.height)
        if command is None:
            continue
        if isinstance(command, CommandFailure):
            logger.warning(f"Line {line_number}: {command.report_line()}")
            result.errors.append(command.report_line())
            continue
        execute_command(store, command)
        result.executed += 1

    logger.info(f"Script processed: {result.executed} executed, {len(result.errors)} failed")
    return result
