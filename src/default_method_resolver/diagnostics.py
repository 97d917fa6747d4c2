"""Diagnostic walks over a type hierarchy.

Neither walk takes part in resolution; they reuse HierarchyWalker to show how
a hierarchy is traversed and how a given supertype is reached.
"""

from typing import override

from rich.console import Console

from default_method_resolver.hierarchy_walker import HierarchyAlgorithm, HierarchyWalker
from default_method_resolver.models import TypeInfo
from default_method_resolver.type_model import TypeModel


class PrintHierarchy(HierarchyAlgorithm[None]):
    """Prints each visited type, indented by its depth on the current path."""

    def __init__(self, console: Console) -> None:
        self._console = console

    @override
    def make_node_data(self, type_info: TypeInfo) -> None:
        return None

    @override
    def free_node_data(self, data: None) -> None:
        pass

    @override
    def visit(self, walker: HierarchyWalker[None]) -> bool:
        indent = "  " * walker.current_depth()
        self._console.print(f"{indent}{walker.current_type().name}", markup=False, highlight=False)
        return True


def print_hierarchy(console: Console, model: TypeModel, root: TypeInfo) -> None:
    """Print root and every path occurrence of its supertypes in walk order."""
    HierarchyWalker(model, PrintHierarchy(console)).run(root)


class FindAncestryPath(HierarchyAlgorithm[None]):
    """Stops the walk at the first occurrence of a type and remembers the path to it."""

    def __init__(self, target_name: str) -> None:
        self.target_name = target_name
        self.path: tuple[str, ...] | None = None

    @override
    def make_node_data(self, type_info: TypeInfo) -> None:
        return None

    @override
    def free_node_data(self, data: None) -> None:
        pass

    @override
    def visit(self, walker: HierarchyWalker[None]) -> bool:
        if walker.current_type().name != self.target_name:
            return True

        names: list[str] = []
        for levels_up in range(walker.current_depth() + 1):
            type_info = walker.type_at_depth(levels_up)
            assert type_info is not None
            names.append(type_info.name)
        self.path = tuple(reversed(names))
        walker.cancel_iteration()
        return False


def ancestry_path(model: TypeModel, root: TypeInfo, type_name: str) -> tuple[str, ...] | None:
    """Find the first path, in walk order, from root to the named supertype.

    Returns:
        Type names from root to type_name inclusive, or None if type_name is
        not in root's ancestry
    """
    finder = FindAncestryPath(type_name)
    HierarchyWalker(model, finder).run(root)
    return finder.path
