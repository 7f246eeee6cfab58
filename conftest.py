"""
Pytest configuration file - Root conftest.py
This file ensures pytest runs with the project root on the Python path.
"""

import sys
from pathlib import Path

# Ensure the project root is in the Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Check if we're in a virtual environment
is_venv = hasattr(sys, "real_prefix") or (hasattr(sys, "base_prefix") and sys.base_prefix != sys.prefix)

if not is_venv:
    print("\n" + "=" * 60)
    print("WARNING: No virtual environment detected!")
    print("=" * 60)
    print("   It's recommended to use a virtual environment.")
    print("   Create one with: python -m venv .venv")
    print("=" * 60 + "\n")


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests that drive a whole casting session")

    print(f"\n{'=' * 60}")
    print(f"Python: {sys.version}")
    print(f"Project Root: {project_root}")
    print(f"{'=' * 60}\n")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add automatic markers."""
    for item in items:
        if "cli" in item.nodeid.lower():
            item.add_marker("integration")
        else:
            item.add_marker("unit")
