"""In-memory model of tests and suites inside a worker."""

from suitetree.core.annotatable import Annotatable
from suitetree.core.models import Annotation, Hook, HookKind, TestResult, TestStatus
from suitetree.core.modifiers import ModifierKind
from suitetree.core.tree import TreeError, WorkerSuite, WorkerTest

__all__ = [
    "Annotatable",
    "Annotation",
    "Hook",
    "HookKind",
    "ModifierKind",
    "TestResult",
    "TestStatus",
    "TreeError",
    "WorkerSuite",
    "WorkerTest",
]
