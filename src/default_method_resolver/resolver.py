"""Default method resolution for a (root type, name, erased signature) triple.

FindMethodsByErasedSignature is a HierarchyAlgorithm that looks for a method
with the requested name and erased signature at every node of the walk:

    - static and private methods are ignored entirely
    - a method on a class is selected directly; the first class found along the
      superclass chain wins over every interface method
    - a method on an interface is recorded in the family under the tracker's
      current state, which then disqualifies everything further up that path

Each call to resolve() builds its own tracker and family, so independent runs
share nothing but the read-only type model.
"""

import logging
from typing import override

from default_method_resolver.hierarchy_walker import HierarchyAlgorithm, HierarchyWalker
from default_method_resolver.method_family import MethodFamily
from default_method_resolver.models import MethodResolution, NoMatchFound, Outcome, TypeInfo
from default_method_resolver.qualification import QualificationTracker, UndoScope
from default_method_resolver.type_model import TypeModel, find_declared_method

logger = logging.getLogger(__name__)


class FindMethodsByErasedSignature(HierarchyAlgorithm[UndoScope]):
    """Collects every method of one erased signature across a type's ancestry."""

    def __init__(self, model: TypeModel, method_name: str, signature: str) -> None:
        self._model = model
        self.method_name = method_name
        self.signature = signature
        self._tracker: QualificationTracker | None = None  # created on the first match

    @property
    def discovered_family(self) -> MethodFamily | None:
        """The family built by the last walk, or None if no method matched."""
        return None if self._tracker is None else self._tracker.family

    @override
    def make_node_data(self, type_info: TypeInfo) -> UndoScope:
        return UndoScope()

    @override
    def free_node_data(self, data: UndoScope) -> None:
        data.destroy()

    @override
    def visit(self, walker: HierarchyWalker[UndoScope]) -> bool:
        type_info = walker.current_type()
        scope = walker.current_data()
        logger.debug("%sVisiting %s", "  " * walker.current_depth(), type_info.name)

        method = find_declared_method(self._model, type_info, self.method_name, self.signature)
        # Private methods never take part in default method selection, and
        # static methods are not inherited
        if method is None or method.is_static or method.is_private:
            return True

        if self._tracker is None:
            self._tracker = QualificationTracker()

        if type_info.is_interface:
            scope.add_mark(self._tracker.record_method_and_disqualify_rest(method))
        else:
            # Single inheritance makes the first class method found the most derived one
            self._tracker.set_target_if_empty(method)
        return True


def resolve(model: TypeModel, root: TypeInfo, method_name: str, signature: str) -> Outcome:
    """Resolve which method a virtual call on root binds to.

    Args:
        model: Source of declared methods and supertypes
        root: Type the call is dispatched on
        method_name: Name of the invoked method
        signature: Erased signature of the invoked method

    Returns:
        Target with the selected method, Conflict describing why no unique
        method exists, or NoMatchFound if no method of that family was found
    """
    finder = FindMethodsByErasedSignature(model, method_name, signature)
    HierarchyWalker(model, finder).run(root)

    family = finder.discovered_family
    if family is None:
        return NoMatchFound()

    family.determine_target(root.name)
    return family.outcome()


class _CollectSignatures(HierarchyAlgorithm[None]):
    """Gathers each distinct (name, signature) that resolution could apply to."""

    def __init__(self, model: TypeModel) -> None:
        self._model = model
        self.found: dict[tuple[str, str], None] = {}  # insertion-ordered set

    @override
    def make_node_data(self, type_info: TypeInfo) -> None:
        return None

    @override
    def free_node_data(self, data: None) -> None:
        pass

    @override
    def visit(self, walker: HierarchyWalker[None]) -> bool:
        for method in self._model.declared_methods(walker.current_type()):
            if not method.is_static and not method.is_private:
                self.found.setdefault((method.name, method.signature), None)
        return True


def collect_method_signatures(model: TypeModel, root: TypeInfo) -> tuple[tuple[str, str], ...]:
    """List every (name, erased signature) of instance methods in root's ancestry.

    Pairs are returned in the order the walk first discovers them.
    """
    collector = _CollectSignatures(model)
    HierarchyWalker(model, collector).run(root)
    return tuple(collector.found)


def resolve_all_methods(model: TypeModel, root: TypeInfo) -> tuple[MethodResolution, ...]:
    """Resolve every instance method signature found in root's ancestry.

    Each signature is resolved in its own independent run.
    """
    return tuple(
        MethodResolution(name=name, signature=signature, outcome=resolve(model, root, name, signature))
        for name, signature in collect_method_signatures(model, root)
    )
