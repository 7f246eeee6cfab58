"""
Tests for console logging and formatting helpers.
"""

from unittest.mock import patch

from colorama import Fore, Style

from modules.common.ui.formatting import color_text, indent_block, prompt_user_input
from modules.common.ui.logging import log_cast, log_error, log_oracle


class TestColorText:
    def test_wraps_with_reset(self):
        assert color_text("hi", Fore.RED) == f"{Style.NORMAL}{Fore.RED}hi{Style.RESET_ALL}"


class TestIndentBlock:
    def test_blank_lines_stay_blank(self):
        assert indent_block("a\n\nb", prefix="  ") == "  a\n\n  b"


class TestPromptUserInput:
    @patch("builtins.input", return_value="  answer  ")
    def test_strips(self, mock_input):
        assert prompt_user_input("? ") == "answer"

    @patch("builtins.input", return_value="")
    def test_default(self, mock_input):
        assert prompt_user_input("? ", default="r") == "r"
        assert prompt_user_input("? ") == ""


class TestLogging:
    def test_log_colors(self, capsys):
        log_cast("line 1")
        log_oracle("sending")
        log_error("failed")
        out = capsys.readouterr().out.splitlines()
        assert out[0] == color_text("line 1", Fore.CYAN)
        assert out[1] == color_text("sending", Fore.MAGENTA)
        assert out[2] == color_text("failed", Fore.RED, Style.BRIGHT)
