"""Shared modifier state for tests and suites.

Flags are stored per node and resolved on demand by walking up the parent
chain, so a modifier applied to a suite also affects children that are added
to it later.
"""

from typing import TYPE_CHECKING, Any, Iterator, Optional

from suitetree.core.models import Annotation, TestStatus
from suitetree.core.modifiers import ModifierKind, parse_modifier_args, resolve_modifier_args

if TYPE_CHECKING:
    from suitetree.core.tree import WorkerSuite


class Annotatable:
    """Base class for anything that can carry modifiers."""

    def __init__(self, title: str, file: str = "", location: str = ""):
        self.title = title
        self.file = file
        self.location = location
        self.parent: Optional["WorkerSuite"] = None

        self.only = False
        self.skipped_self = False
        self.flaky_self = False
        self.slow_self = False
        self.expected_status_self = TestStatus.PASSED
        # Only applications made on this node; ancestors keep their own.
        self.annotations: list[Annotation] = []

        self.id: Optional[str] = None
        self.ordinal: Optional[int] = None

    def skip(self, condition: Any = None, description: Optional[str] = None) -> bool:
        return self.apply_modifier(ModifierKind.SKIP, condition, description)

    def fixme(self, condition: Any = None, description: Optional[str] = None) -> bool:
        return self.apply_modifier(ModifierKind.FIXME, condition, description)

    def slow(self, condition: Any = None, description: Optional[str] = None) -> bool:
        return self.apply_modifier(ModifierKind.SLOW, condition, description)

    def flaky(self, condition: Any = None, description: Optional[str] = None) -> bool:
        return self.apply_modifier(ModifierKind.FLAKY, condition, description)

    def fail(self, condition: Any = None, description: Optional[str] = None) -> bool:
        return self.apply_modifier(ModifierKind.FAIL, condition, description)

    def apply_modifier(
        self,
        kind: ModifierKind | str,
        condition: Any = None,
        description: Optional[str] = None,
    ) -> bool:
        """Apply a modifier if its condition holds.

        Args:
            kind: Which modifier to apply
            condition: Absent, a truthy/falsy value, or a description string
            description: Reason recorded in the annotation

        Returns:
            True if the modifier took effect. A modifier whose condition is
            false changes nothing, not even the annotation history.
        """
        kind = ModifierKind(kind)
        resolved = resolve_modifier_args(parse_modifier_args(condition, description))
        if not resolved.live:
            return False

        if kind in (ModifierKind.SKIP, ModifierKind.FIXME):
            self.skipped_self = True
        elif kind == ModifierKind.SLOW:
            self.slow_self = True
        elif kind == ModifierKind.FLAKY:
            self.flaky_self = True
        elif kind == ModifierKind.FAIL:
            self.expected_status_self = TestStatus.FAILED

        self.annotations.append(Annotation(type=kind.value, description=resolved.description))
        return True

    def is_skipped(self) -> bool:
        return self.skipped_self or (self.parent is not None and self.parent.is_skipped())

    def is_slow(self) -> bool:
        return self.slow_self or (self.parent is not None and self.parent.is_slow())

    def is_flaky(self) -> bool:
        return self.flaky_self or (self.parent is not None and self.parent.is_flaky())

    def expected_status(self) -> TestStatus:
        """Get the expected status, inherited from the nearest failing ancestor."""
        if self.expected_status_self == TestStatus.FAILED:
            return TestStatus.FAILED
        if self.parent is not None:
            return self.parent.expected_status()
        return TestStatus.PASSED

    def collect_annotations(self) -> list[Annotation]:
        """Get annotations of this node followed by those of its ancestors."""
        if self.parent is None:
            return list(self.annotations)
        return [*self.annotations, *self.parent.collect_annotations()]

    def ancestors(self) -> Iterator["WorkerSuite"]:
        """Iterate over enclosing suites, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def title_path(self) -> list[str]:
        """Get non-empty titles from the root down to this node."""
        titles = [node.title for node in reversed(list(self.ancestors()))]
        titles.append(self.title)
        return [title for title in titles if title]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(title={self.title!r})"
