"""Scoped qualification state for a single resolution run.

QualificationTracker holds one mutable "current state" for the whole walk.
Every interface method found flips it to DISQUALIFIED, so anything found
further up the same path (through more super/interface expansion) is recorded
as disqualified.

Each walker node owns an UndoScope. The StateRestorer produced while visiting
the node is added to that scope, and when the walker pops the node the scope
puts the tracker back to the state it had on entry. Sibling interface branches
therefore never see each other's disqualifications.
"""

from dataclasses import dataclass, field

from default_method_resolver.method_family import MethodFamily
from default_method_resolver.models import MethodInfo, QualificationState


class QualificationTracker:
    """Current qualification state plus the family being built."""

    def __init__(self, family: MethodFamily | None = None) -> None:
        self.state = QualificationState.QUALIFIED
        self.family = family if family is not None else MethodFamily()

    def set_target_if_empty(self, method: MethodInfo) -> None:
        self.family.set_target_if_empty(method)

    def record_method_and_disqualify_rest(self, method: MethodInfo) -> "StateRestorer":
        """Record a method under the current state, then disqualify everything above it.

        Returns:
            A restorer that puts the current state back to its value before this call
        """
        mark = StateRestorer(state_to_restore=self.state, tracker=self)
        if self.state == QualificationState.QUALIFIED:
            self.family.record_qualified_method(method)
        else:
            self.family.record_disqualified_method(method)
        self.state = QualificationState.DISQUALIFIED
        return mark


@dataclass(frozen=True)
class StateRestorer:
    """Captured tracker state from before a method was recorded."""

    state_to_restore: QualificationState
    tracker: QualificationTracker

    def restore_state(self) -> None:
        self.tracker.state = self.state_to_restore


@dataclass
class UndoScope:
    """Restore marks collected while visiting one walker node."""

    marks: list[StateRestorer] = field(default_factory=list)
    destroyed: bool = False

    def add_mark(self, restorer: StateRestorer) -> None:
        assert not self.destroyed, "Cannot add a mark to a destroyed scope"
        self.marks.append(restorer)

    def destroy(self) -> None:
        """Replay every mark in insertion order. Must run exactly once."""
        assert not self.destroyed, "Undo scope destroyed twice"
        self.destroyed = True
        for mark in self.marks:
            mark.restore_state()
