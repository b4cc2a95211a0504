"""
Test suites package.

Kept importable so that shared helpers (``testsuites.fakes``) and page
objects (``testsuites.ui_testing.pages``) can be imported by tests and by
``run_tests.py``.
"""
