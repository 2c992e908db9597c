"""Tests for modifier state and inheritance."""

import pytest

from suitetree.core.models import Annotation, TestStatus
from suitetree.core.tree import WorkerSuite, WorkerTest


def noop():
    pass


@pytest.fixture
def tree():
    """Root suite > outer suite > inner suite > test."""
    root = WorkerSuite("", file="checkout.spec")
    outer = WorkerSuite("outer")
    inner = WorkerSuite("inner")
    test = WorkerTest("pays", noop)
    root.add_suite(outer)
    outer.add_suite(inner)
    inner.add_test(test)
    return root, outer, inner, test


class TestModifiers:
    """Tests for applying modifiers to a single node."""

    def test_defaults(self):
        """Test that a new node has no modifiers."""
        test = WorkerTest("t", noop)
        assert not test.is_skipped()
        assert not test.is_slow()
        assert not test.is_flaky()
        assert not test.only
        assert test.expected_status() == TestStatus.PASSED
        assert test.collect_annotations() == []

    def test_skip_without_arguments(self):
        """Test that skip() applies unconditionally."""
        test = WorkerTest("t", noop)
        assert test.skip() is True
        assert test.is_skipped()
        assert test.annotations == [Annotation(type="skip")]

    def test_fixme_sets_skip_flag(self):
        """Test that fixme marks the node as skipped with its own annotation type."""
        test = WorkerTest("t", noop)
        test.fixme("broken on Windows")
        assert test.is_skipped()
        assert test.annotations == [Annotation(type="fixme", description="broken on Windows")]

    def test_slow_and_flaky(self):
        """Test slow and flaky flags."""
        test = WorkerTest("t", noop)
        test.slow(True, "big upload")
        test.flaky()
        assert test.is_slow()
        assert test.is_flaky()
        assert [a.type for a in test.annotations] == ["slow", "flaky"]

    def test_fail_sets_expected_status(self):
        """Test that fail marks the test as expected to fail."""
        test = WorkerTest("t", noop)
        test.fail("known issue")
        assert test.expected_status() == TestStatus.FAILED

    @pytest.mark.parametrize("method", ["skip", "fixme", "slow", "flaky", "fail"])
    def test_false_condition_is_noop(self, method):
        """Test that a false condition leaves the node untouched."""
        test = WorkerTest("t", noop)
        assert getattr(test, method)(False, "never") is False
        assert not test.is_skipped()
        assert not test.is_slow()
        assert not test.is_flaky()
        assert test.expected_status() == TestStatus.PASSED
        assert test.annotations == []

    def test_flags_are_monotonic(self):
        """Test that a later false condition does not clear a flag."""
        test = WorkerTest("t", noop)
        test.skip(True)
        test.skip(False)
        assert test.is_skipped()
        assert len(test.annotations) == 1

    def test_repeated_modifier_keeps_history(self):
        """Test that every live application is recorded in order."""
        test = WorkerTest("t", noop)
        test.skip("one")
        test.skip(True, "two")
        assert test.annotations == [
            Annotation(type="skip", description="one"),
            Annotation(type="skip", description="two"),
        ]

    def test_fail_then_false_fail(self):
        """Test that fail(False) after fail('known issue') changes nothing."""
        test = WorkerTest("X", noop)
        test.fail("known issue")
        test.fail(False)

        assert test.expected_status() == TestStatus.FAILED
        fails = [a for a in test.collect_annotations() if a.type == "fail"]
        assert fails == [Annotation(type="fail", description="known issue")]

    def test_apply_modifier_by_name(self):
        """Test applying a modifier by its string kind."""
        test = WorkerTest("t", noop)
        test.apply_modifier("slow", "needs a database")
        assert test.is_slow()

    def test_apply_unknown_modifier(self):
        """Test that unknown kinds are rejected."""
        test = WorkerTest("t", noop)
        with pytest.raises(ValueError):
            test.apply_modifier("sometimes")


class TestInheritance:
    """Tests for resolving modifiers through the parent chain."""

    def test_flag_on_ancestor(self, tree):
        """Test that a flag on any ancestor applies to the test."""
        root, outer, inner, test = tree
        outer.slow()
        assert test.is_slow()
        assert inner.is_slow()
        assert not root.is_slow()

    def test_flag_on_root(self, tree):
        """Test that a flag on the root applies everywhere."""
        root, outer, inner, test = tree
        root.flaky()
        assert all(node.is_flaky() for node in (root, outer, inner, test))

    def test_flag_on_child_does_not_leak_up(self, tree):
        """Test that a child's flag does not affect its parent."""
        root, outer, inner, test = tree
        test.skip()
        assert not inner.is_skipped()

    def test_late_modifier_affects_children(self):
        """Test that a suite modifier affects tests added after it."""
        suite = WorkerSuite("s")
        suite.skip("later")
        test = WorkerTest("t", noop)
        suite.add_test(test)
        assert test.is_skipped()

    def test_expected_status_inherited(self, tree):
        """Test that fail on an ancestor makes descendants expected to fail."""
        root, outer, inner, test = tree
        outer.fail()
        assert test.expected_status() == TestStatus.FAILED
        assert root.expected_status() == TestStatus.PASSED

    def test_collect_annotations_nearest_first(self, tree):
        """Test that annotations are ordered from the node up to the root."""
        root, outer, inner, test = tree
        root.slow("root")
        outer.skip("outer")
        test.flaky("test")
        test.fail("test again")

        assert test.collect_annotations() == [
            Annotation(type="flaky", description="test"),
            Annotation(type="fail", description="test again"),
            Annotation(type="skip", description="outer"),
            Annotation(type="slow", description="root"),
        ]
        # Collection does not copy anything into the node itself.
        assert len(test.annotations) == 2

    def test_collect_annotations_is_recomputed(self, tree):
        """Test that annotations added later show up in the collected view."""
        root, outer, inner, test = tree
        assert test.collect_annotations() == []
        inner.slow()
        assert test.collect_annotations() == [Annotation(type="slow")]

    def test_ancestors(self, tree):
        """Test that ancestors are listed nearest first."""
        root, outer, inner, test = tree
        assert list(test.ancestors()) == [inner, outer, root]
        assert list(root.ancestors()) == []

    def test_title_path(self, tree):
        """Test that the title path skips the untitled root."""
        root, outer, inner, test = tree
        assert test.title_path() == ["outer", "inner", "pays"]
