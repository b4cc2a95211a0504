"""
================================================================================
Test Suite Pytest Configuration
================================================================================

Registers project markers and provides the shared fixtures: an in-memory
Playwright-shaped page, fast retry settings and a page factory bound to both.

================================================================================
"""

import pytest

from testsuites.fakes import FakePage
from webblocks.framework import WaitConfig, WebPageFactory


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "slow: Tests waiting for a retry deadline to elapse"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework unit tests"
    )
    config.addinivalue_line(
        "markers", "ui: Page-object tests"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "ui_testing" in str(item.fspath):
            item.add_marker(pytest.mark.ui)


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture
def fast_wait() -> WaitConfig:
    """Retry settings of the run: loader.* config, LOADER__TIMEOUT included."""
    return WaitConfig.from_config()


@pytest.fixture
def fake_page() -> FakePage:
    """Empty in-memory page; tests render the elements they need."""
    return FakePage()


@pytest.fixture
def page_factory(fake_page: FakePage, fast_wait: WaitConfig) -> WebPageFactory:
    return WebPageFactory(fake_page, wait_config=fast_wait)
