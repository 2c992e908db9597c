"""
SuiteTree - in-memory model of test suites inside a test worker.

This package provides tools to:
- Build trees of tests and nested suites with lifecycle hooks
- Apply conditional skip, fixme, slow, flaky and fail modifiers
- Resolve modifiers inherited from enclosing suites
- Number tests and assign ids stable across a run configuration
"""

__version__ = "0.1.0"
__author__ = "SuiteTree Team"
