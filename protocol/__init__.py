"""Command protocol spoken by the drawing agent."""

from .commands import (
    COMMAND_REGISTRY, CommandFailure, build_command, parse_command, register_command,
)
from .executor import ScriptResult, execute_command, process_script
from .prompt_builder import build_system_prompt, build_user_message, format_user_changes

__all__ = [
    "COMMAND_REGISTRY", "CommandFailure", "build_command", "parse_command",
    "register_command", "ScriptResult", "execute_command", "process_script",
    "build_system_prompt", "build_user_message", "format_user_changes",
]
