"""
Repository-level pytest configuration.

Pins the framework configuration to test-friendly values (short retry
deadline, fast polling) unless the caller or CI already set them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _test_env_defaults() -> Generator[None, None, None]:
    """
    Set test-friendly configuration defaults if not already provided by the user/CI.

    Page objects created without an explicit WaitConfig read these.
    """
    defaults = {
        "ENVIRONMENT": "test",
        "LOADER__TIMEOUT": "0.3",
        "LOADER__POLLING_INTERVAL": "0.01",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
