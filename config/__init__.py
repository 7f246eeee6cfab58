"""
Configuration package.

This package contains configuration constants and API keys for all components.

The configuration is organized into separate modules:
- iching: casting, assembly, oracle and image settings
- config_api: API keys and secrets
"""

from .iching import *  # noqa: F403, F401

# Import API configuration last
from .config_api import *  # noqa: F403, F401
