"""
API Configuration for the interpretation oracle.

The Gemini API key is never stored in this repository. Provide it through the
environment:
    export GEMINI_API_KEY='your-api-key-here'
    PowerShell: $env:GEMINI_API_KEY='your-api-key-here'

Keys can be created at https://aistudio.google.com/app/apikey
"""

import os
from typing import Optional

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or None


def _read_from_registry(env_var_name: str) -> Optional[str]:
    """
    Read a user-level environment variable from the Windows Registry.

    Covers variables set with [Environment]::SetEnvironmentVariable after the
    current process started.

    Returns:
        The value if found, None otherwise (including on non-Windows systems)
    """
    try:
        import winreg
    except ImportError:
        return None

    try:
        key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Environment")
    except OSError:
        return None
    try:
        value = winreg.QueryValueEx(key, env_var_name)[0]
    except OSError:
        return None
    finally:
        winreg.CloseKey(key)
    return value or None


if GEMINI_API_KEY is None:
    GEMINI_API_KEY = _read_from_registry("GEMINI_API_KEY")
