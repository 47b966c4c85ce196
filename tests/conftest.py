"""
Pytest configuration for the `netatmo-client` test suite.

Tests import `netatmo_client...` normally. To make that work in a fresh
checkout without requiring an editable install, we add the local `src`
directory to `sys.path`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    """
    Ensure the local `netatmo_client` package is importable for tests.

    This only affects the test runtime.
    """

    project_root = Path(__file__).resolve().parent.parent
    src_dir = project_root / "src"

    if src_dir.is_dir():
        # Prepend so local sources win over any globally installed package.
        sys.path.insert(0, str(src_dir))
