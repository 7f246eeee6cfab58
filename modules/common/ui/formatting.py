"""
Text formatting and user input utilities.
"""

from typing import Optional

from colorama import Fore, Style


def color_text(text: str, color: str = Fore.WHITE, style: str = Style.NORMAL) -> str:
    """
    Applies color and style to text using colorama.

    Args:
        text: Text to format
        color: Colorama Fore color (default: Fore.WHITE)
        style: Colorama Style (default: Style.NORMAL)

    Returns:
        Formatted text string with color and style codes
    """
    return f"{style}{color}{text}{Style.RESET_ALL}"


def prompt_user_input(
    prompt: str,
    default: Optional[str] = None,
    color: str = Fore.YELLOW,
) -> str:
    """
    Prompt user for input with optional default value and colored prompt.

    Args:
        prompt: Prompt message to display
        default: Default value if user enters empty string
        color: Colorama Fore color for prompt (default: Fore.YELLOW)

    Returns:
        User input string, or default if empty input provided
    """
    user_input = input(color_text(prompt, color)).strip()
    return user_input if user_input else (default or "")


def indent_block(text: str, prefix: str = "    ") -> str:
    """Prefix every line of a multi-line block, keeping blank lines blank."""
    return "\n".join(prefix + line if line.strip() else "" for line in text.splitlines())
