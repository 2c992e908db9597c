"""Data models shared by the suite tree and its collaborators."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class TestStatus(str, Enum):
    """Status of a test execution."""

    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timedOut"
    SKIPPED = "skipped"


class HookKind(str, Enum):
    """Lifecycle hook kinds a suite can register."""

    BEFORE_ALL = "beforeAll"
    AFTER_ALL = "afterAll"
    BEFORE_EACH = "beforeEach"
    AFTER_EACH = "afterEach"


@dataclass(frozen=True)
class Annotation:
    """A record of one modifier application."""

    type: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary, leaving out an absent description."""
        result = {"type": self.type}
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass
class Hook:
    """A registered lifecycle hook."""

    kind: HookKind
    body: Callable[..., Any]


@dataclass
class TestResult:
    """Outcome of a single execution attempt of a test."""

    retry: int = 0
    worker_index: int = 0
    status: TestStatus = TestStatus.PASSED
    duration_ms: int = 0
    error: Optional[str] = None
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "retry": self.retry,
            "worker_index": self.worker_index,
            "status": self.status.value if isinstance(self.status, TestStatus) else self.status,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "stdout": list(self.stdout),
            "stderr": list(self.stderr),
            "data": dict(self.data),
        }
