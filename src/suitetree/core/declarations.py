"""Declarative JSON description of a suite tree.

A declaration file describes one test file: its suites, tests, hooks and
modifiers in declaration order. ``build_suite`` turns it into a
``WorkerSuite`` using the same calls a registration layer would make.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from suitetree.core.models import HookKind
from suitetree.core.modifiers import ModifierKind
from suitetree.core.tree import WorkerSuite, WorkerTest

logger = logging.getLogger(__name__)


class ModifierDeclaration(BaseModel):
    """A modifier applied to a test or suite."""

    kind: ModifierKind
    condition: Optional[Union[bool, str]] = None
    description: Optional[str] = None


class TestDeclaration(BaseModel):
    """A single test."""

    type: Literal["test"] = "test"
    title: str
    location: str = ""
    timeout: int = Field(default=0, description="Timeout override in ms, 0 for the default")
    modifiers: list[ModifierDeclaration] = Field(default_factory=list)

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Timeout cannot be negative")
        return v


class SuiteDeclaration(BaseModel):
    """A suite and its entries in declaration order."""

    type: Literal["suite"] = "suite"
    title: str = ""
    location: str = ""
    modifiers: list[ModifierDeclaration] = Field(default_factory=list)
    hooks: list[HookKind] = Field(default_factory=list)
    entries: list[
        Annotated[Union[TestDeclaration, "SuiteDeclaration"], Field(discriminator="type")]
    ] = Field(default_factory=list)


SuiteDeclaration.model_rebuild()


class FileDeclaration(BaseModel):
    """Top-level declaration of one test file."""

    file: str
    suite: SuiteDeclaration = Field(default_factory=SuiteDeclaration)


def _noop() -> None:
    return None


def _apply_modifiers(node: WorkerTest | WorkerSuite, modifiers: list[ModifierDeclaration]) -> None:
    for modifier in modifiers:
        node.apply_modifier(modifier.kind, modifier.condition, modifier.description)


def _build(declaration: SuiteDeclaration, file: str) -> WorkerSuite:
    suite = WorkerSuite(declaration.title, file=file, location=declaration.location)
    _apply_modifiers(suite, declaration.modifiers)
    for kind in declaration.hooks:
        suite.add_hook(kind, _noop)

    for entry in declaration.entries:
        if isinstance(entry, SuiteDeclaration):
            suite.add_suite(_build(entry, file))
        else:
            test = WorkerTest(entry.title, _noop, file=file, location=entry.location)
            test.timeout = entry.timeout
            _apply_modifiers(test, entry.modifiers)
            suite.add_test(test)
    return suite


def build_suite(declaration: FileDeclaration) -> WorkerSuite:
    """Build the root suite of a file declaration.

    The returned tree is not numbered; call ``renumber`` and ``assign_ids``
    once it is complete.
    """
    root = _build(declaration.suite, declaration.file)
    logger.debug("Built suite tree for %s with %d tests", declaration.file, len(root.all_tests()))
    return root


def load_declaration(path: Path | str) -> FileDeclaration:
    """Load a file declaration from JSON."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Declaration file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    return FileDeclaration.model_validate(data)
