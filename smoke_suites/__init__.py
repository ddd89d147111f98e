"""
Smoke suites package.

`smoke_suites` stays importable to support:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - the unit tests importing page objects and fakes
"""
