"""Tests and suites as built inside a worker.

The canonical traversal order used for ordinals and ids is depth-first with
a suite's child suites visited before its own tests. ``entries`` keeps the
interleaved declaration order and ``iter_entries`` walks it for reporting.
"""

import logging
from typing import Any, Callable, Iterator, Optional, Union

from suitetree.core.annotatable import Annotatable
from suitetree.core.models import Hook, HookKind, TestResult

logger = logging.getLogger(__name__)


class TreeError(Exception):
    """Raised when the suite tree is built or numbered incorrectly."""

    pass


class WorkerTest(Annotatable):
    """A single test and the results of its execution attempts."""

    def __init__(self, title: str, body: Callable[..., Any], file: str = "", location: str = ""):
        super().__init__(title, file=file, location=location)
        self.body = body
        self.results: list[TestResult] = []
        # 0 means the ambient default applies.
        self.timeout = 0

    def add_result(self, result: TestResult) -> None:
        self.results.append(result)

    def effective_timeout(self, default_ms: int, slow_multiplier: int = 3) -> int:
        """Get the timeout this test should run with, in milliseconds.

        Args:
            default_ms: Ambient timeout used when the test has no override
            slow_multiplier: Factor applied when the test is marked slow

        Returns:
            The timeout in milliseconds
        """
        timeout = self.timeout or default_ms
        if self.is_slow():
            timeout *= slow_multiplier
        return timeout


class WorkerSuite(Annotatable):
    """A container of tests, nested suites and lifecycle hooks."""

    def __init__(self, title: str, file: str = "", location: str = ""):
        super().__init__(title, file=file, location=location)
        self.suites: list[WorkerSuite] = []
        self.tests: list[WorkerTest] = []
        self.entries: list[Union[WorkerSuite, WorkerTest]] = []
        self.hooks: list[Hook] = []

    def add_test(self, test: WorkerTest) -> None:
        self._adopt(test)
        self.tests.append(test)
        self.entries.append(test)

    def add_suite(self, suite: "WorkerSuite") -> None:
        self._adopt(suite)
        self.suites.append(suite)
        self.entries.append(suite)

    def _adopt(self, child: Annotatable) -> None:
        if child.parent is not None:
            raise TreeError(
                f"{child!r} already belongs to {child.parent!r} and cannot be added to {self!r}"
            )
        child.parent = self
        logger.debug("Added %r to suite %r", child, self.title)

    def find_first_test(self, predicate: Callable[[WorkerTest], Any]) -> bool:
        """Visit tests depth-first until the predicate returns a truthy value.

        Child suites are visited before the suite's own tests.

        Returns:
            True if the predicate matched a test
        """
        for suite in self.suites:
            if suite.find_first_test(predicate):
                return True
        for test in self.tests:
            if predicate(test):
                return True
        return False

    def all_tests(self) -> list[WorkerTest]:
        result: list[WorkerTest] = []
        self.find_first_test(result.append)
        return result

    def iter_entries(self) -> Iterator[Union["WorkerSuite", WorkerTest]]:
        """Iterate over all descendants in declaration order."""
        for entry in self.entries:
            yield entry
            if isinstance(entry, WorkerSuite):
                yield from entry.iter_entries()

    def renumber(self) -> None:
        """Assign ordinals to all tests in traversal order."""
        tests = self.all_tests()
        for ordinal, test in enumerate(tests):
            test.ordinal = ordinal
        logger.debug("Renumbered %d tests in %r", len(tests), self.file or self.title)

    def assign_ids(self, configuration_key: str) -> None:
        """Give every test an id of the form ``{ordinal}@{file}::[{key}]``.

        Raises:
            TreeError: If a test has not been renumbered
        """
        tests = self.all_tests()
        unnumbered = [test for test in tests if test.ordinal is None]
        if unnumbered:
            raise TreeError(f"{unnumbered[0]!r} has no ordinal; call renumber() first")
        for test in tests:
            test.id = f"{test.ordinal}@{self.file}::[{configuration_key}]"
        logger.debug("Assigned ids in %r for configuration %r", self.file, configuration_key)

    def find_test_by_id(self, test_id: str) -> Optional[WorkerTest]:
        found: list[WorkerTest] = []

        def matches(test: WorkerTest) -> bool:
            if test.id == test_id:
                found.append(test)
                return True
            return False

        self.find_first_test(matches)
        return found[0] if found else None

    def add_hook(self, kind: HookKind | str, body: Callable[..., Any]) -> None:
        self.hooks.append(Hook(kind=HookKind(kind), body=body))

    def hooks_of(self, kind: HookKind | str) -> list[Callable[..., Any]]:
        """Get the bodies of hooks of one kind in registration order."""
        kind = HookKind(kind)
        return [hook.body for hook in self.hooks if hook.kind == kind]

    def has_runnable_tests(self) -> bool:
        """Check whether at least one test in the tree is not skipped."""
        return self.find_first_test(lambda test: not test.is_skipped())
