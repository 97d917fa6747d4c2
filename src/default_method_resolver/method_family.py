"""Accumulator for every same-signature method found during a hierarchy walk.

Members are stored in an insertion-ordered arena: one list of methods, one
parallel list of qualification states, and an index from method to its slot.
A method is recorded at most once, but its state can later be forced to
DISQUALIFIED.

Target determination runs once after the walk:
    - a method found on a class always wins (set_target_if_empty during the walk)
    - otherwise exactly one qualified default method is the target
    - no qualified default method is an AbstractMethodError conflict
    - several qualified default methods are an IncompatibleClassChangeError conflict
"""

import logging

from default_method_resolver.models import (
    Conflict,
    ConflictKind,
    MethodInfo,
    NoMatchFound,
    Outcome,
    QualificationState,
    Target,
)

logger = logging.getLogger(__name__)

NONE_FOUND_DETAIL = "none found"


class MethodFamily:
    """All candidates for one (name, erased signature), with their qualification."""

    def __init__(self) -> None:
        self._members: list[MethodInfo] = []
        self._states: list[QualificationState] = []
        self._member_index: dict[MethodInfo, int] = {}

        # Set at most once; mutually exclusive with the conflict fields
        self._selected_target: MethodInfo | None = None
        self._conflict: Conflict | None = None

    def __repr__(self) -> str:
        return f"MethodFamily(target={self._selected_target}, conflict={self._conflict})"

    def contains_method(self, method: MethodInfo) -> bool:
        return method in self._member_index

    def contains_signature(self, name: str, signature: str) -> bool:
        """Check whether any member has this name and erased signature."""
        return any(m.name == name and m.signature == signature for m in self._members)

    def entries(self) -> tuple[tuple[MethodInfo, QualificationState], ...]:
        """Recorded members and their current states, in recorded order."""
        return tuple(zip(self._members, self._states, strict=True))

    def state_of(self, method: MethodInfo) -> QualificationState | None:
        index = self._member_index.get(method)
        return None if index is None else self._states[index]

    def _add_method(self, method: MethodInfo, state: QualificationState) -> None:
        logger.debug("Recording %s as %s", method, state.name)
        self._member_index[method] = len(self._members)
        self._members.append(method)
        self._states.append(state)

    def _disqualify_method(self, method: MethodInfo) -> None:
        logger.debug("Disqualifying %s", method)
        self._states[self._member_index[method]] = QualificationState.DISQUALIFIED

    def record_qualified_method(self, method: MethodInfo) -> None:
        """Add a method as qualified unless it is already recorded.

        A method already present as qualified stays qualified, and one present
        as disqualified stays disqualified.
        """
        if not self.contains_method(method):
            self._add_method(method, QualificationState.QUALIFIED)

    def record_disqualified_method(self, method: MethodInfo) -> None:
        """Add a method as disqualified, or force an existing entry to disqualified."""
        if not self.contains_method(method):
            self._add_method(method, QualificationState.DISQUALIFIED)
        else:
            self._disqualify_method(method)

    def set_target_if_empty(self, method: MethodInfo) -> None:
        """Select a class-declared method unless a target is already chosen."""
        if self._selected_target is None and self._conflict is None:
            logger.debug("Selecting class method %s", method)
            self._selected_target = method

    def has_target(self) -> bool:
        return self._selected_target is not None

    def throws_exception(self) -> bool:
        return self._conflict is not None

    @property
    def selected_target(self) -> MethodInfo | None:
        return self._selected_target

    @property
    def conflict(self) -> Conflict | None:
        return self._conflict

    def determine_target(self, root: str) -> None:
        """Select the unique qualified default method, or record why there is none.

        Does nothing if a target or conflict is already set, so a class-declared
        method recorded during the walk always takes priority.

        Args:
            root: Name of the type the hierarchy was walked from
        """
        if self.has_target() or self.throws_exception():
            return

        assert self._members, f"Cannot determine a target for {root} from an empty method family"

        # Qualified methods are the maximally specific ones: defaults and abstracts
        qualified = [m for m, state in self.entries() if state == QualificationState.QUALIFIED]
        defaults = [m for m in qualified if m.has_body]

        if not defaults:
            self._conflict = Conflict(kind=ConflictKind.ABSTRACT_METHOD_ERROR, detail=NONE_FOUND_DETAIL)
        elif len(defaults) == 1:
            self._selected_target = defaults[-1]
        else:
            self._conflict = Conflict(
                kind=ConflictKind.INCOMPATIBLE_CLASS_CHANGE_ERROR,
                detail="\n".join(str(m) for m in qualified),
                candidates=tuple(qualified),
            )
        logger.debug("Resolved family for %s: %r", root, self)

    def outcome(self) -> Outcome:
        """The resolution outcome; call after determine_target."""
        if self._selected_target is not None:
            return Target(self._selected_target)
        if self._conflict is not None:
            return self._conflict
        return NoMatchFound()
