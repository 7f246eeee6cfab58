"""UI/CLI utilities for logging and formatting."""

from .formatting import color_text, indent_block, prompt_user_input
from .logging import (
    log_cast,
    log_debug,
    log_error,
    log_info,
    log_oracle,
    log_success,
    log_warn,
)

__all__ = [
    "color_text",
    "indent_block",
    "prompt_user_input",
    "log_info",
    "log_success",
    "log_error",
    "log_warn",
    "log_debug",
    "log_cast",
    "log_oracle",
]
