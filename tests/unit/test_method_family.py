"""Unit tests for MethodFamily recording and target determination."""

import pytest

from default_method_resolver.method_family import NONE_FOUND_DETAIL, MethodFamily
from default_method_resolver.models import Conflict, ConflictKind, NoMatchFound, QualificationState, Target
from tests.helpers.factories import make_method

QUALIFIED = QualificationState.QUALIFIED
DISQUALIFIED = QualificationState.DISQUALIFIED


def test_record_qualified_method_is_idempotent() -> None:
    """Test that recording a qualified method twice keeps one entry."""
    family = MethodFamily()
    method = make_method("I1")

    family.record_qualified_method(method)
    family.record_qualified_method(method)

    assert family.entries() == ((method, QUALIFIED),)


def test_disqualification_overrides_qualified_entry() -> None:
    """Test that a disqualified record forces an existing entry to disqualified."""
    family = MethodFamily()
    method = make_method("I1")

    family.record_qualified_method(method)
    family.record_disqualified_method(method)

    assert family.state_of(method) == DISQUALIFIED
    assert len(family.entries()) == 1


def test_qualified_record_never_requalifies() -> None:
    """Test that a disqualified entry stays disqualified when found again as qualified."""
    family = MethodFamily()
    method = make_method("I1")

    family.record_disqualified_method(method)
    family.record_qualified_method(method)

    assert family.state_of(method) == DISQUALIFIED


def test_entries_keep_insertion_order() -> None:
    """Test that members are reported in the order they were first recorded."""
    family = MethodFamily()
    first, second, third = make_method("A"), make_method("B"), make_method("C")

    family.record_qualified_method(first)
    family.record_disqualified_method(second)
    family.record_qualified_method(third)
    family.record_disqualified_method(first)

    assert family.entries() == ((first, DISQUALIFIED), (second, DISQUALIFIED), (third, QUALIFIED))


def test_membership_queries() -> None:
    """Test contains_method, contains_signature, and state_of."""
    family = MethodFamily()
    method = make_method("I1", "run", signature="(int)None")
    family.record_qualified_method(method)

    assert family.contains_method(method)
    assert not family.contains_method(make_method("I2", "run", signature="(int)None"))
    assert family.contains_signature("run", "(int)None")
    assert not family.contains_signature("run", "()None")
    assert family.state_of(make_method("I2")) is None


def test_single_qualified_default_is_selected() -> None:
    """Test that exactly one qualified default method becomes the target."""
    family = MethodFamily()
    default = make_method("I1")
    family.record_qualified_method(make_method("I0", has_body=False))
    family.record_qualified_method(default)
    family.record_disqualified_method(make_method("I2"))

    family.determine_target("R")

    assert family.selected_target == default
    assert family.outcome() == Target(default)
    assert not family.throws_exception()


def test_no_qualified_default_is_abstract_method_error() -> None:
    """Test that only abstract qualified methods yield AbstractMethodError."""
    family = MethodFamily()
    family.record_qualified_method(make_method("I1", has_body=False))
    family.record_disqualified_method(make_method("I2"))

    family.determine_target("R")

    assert family.outcome() == Conflict(kind=ConflictKind.ABSTRACT_METHOD_ERROR, detail=NONE_FOUND_DETAIL)
    assert not family.has_target()


def test_several_qualified_defaults_are_incompatible() -> None:
    """Test that two qualified defaults yield IncompatibleClassChangeError listing every qualified method."""
    family = MethodFamily()
    left, right, abstract = make_method("Left"), make_method("Right"), make_method("Sized", has_body=False)
    family.record_qualified_method(left)
    family.record_qualified_method(abstract)
    family.record_qualified_method(right)

    family.determine_target("R")

    conflict = family.conflict
    assert conflict is not None
    assert conflict.kind == ConflictKind.INCOMPATIBLE_CLASS_CHANGE_ERROR
    assert conflict.detail == "Left.m()None\nSized.m()None\nRight.m()None"
    assert conflict.candidates == (left, abstract, right)


def test_class_target_preempts_determination() -> None:
    """Test that a class method selected during the walk survives determine_target."""
    family = MethodFamily()
    class_method = make_method("C")
    family.record_qualified_method(make_method("Left"))
    family.record_qualified_method(make_method("Right"))
    family.set_target_if_empty(class_method)

    family.determine_target("R")

    assert family.outcome() == Target(class_method)
    assert family.conflict is None


def test_set_target_if_empty_keeps_first_target() -> None:
    """Test that the first class method found stays selected."""
    family = MethodFamily()
    derived, base = make_method("Derived"), make_method("Base")

    family.set_target_if_empty(derived)
    family.set_target_if_empty(base)

    assert family.selected_target == derived


def test_determine_target_is_idempotent() -> None:
    """Test that a second determination does not change the outcome."""
    family = MethodFamily()
    family.record_qualified_method(make_method("Left"))
    family.record_qualified_method(make_method("Right"))

    family.determine_target("R")
    first = family.outcome()
    family.record_qualified_method(make_method("Late"))
    family.determine_target("R")

    assert family.outcome() == first


def test_determine_target_on_empty_family_is_a_contract_violation() -> None:
    """Test that determining the target with nothing recorded fails loudly."""
    family = MethodFamily()
    with pytest.raises(AssertionError, match="empty method family"):
        family.determine_target("R")


def test_outcome_before_determination() -> None:
    """Test that an undetermined family without a class target reports no match."""
    assert MethodFamily().outcome() == NoMatchFound()
