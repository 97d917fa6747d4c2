"""Generic depth-first walker over a type's superclass and superinterface graph.

The walker knows nothing about methods. An analysis plugs into it through the
HierarchyAlgorithm protocol: it creates a piece of per-node data when a type is
pushed, frees that data when the node is popped, and inspects the current path
from its visit callback.

Traversal order:
    At every node the superclass is expanded first, then each superinterface in
    declared order. Interfaces reachable along several paths are visited once per
    path; nothing is memoized, so per-node data is created and freed once per
    path occurrence.

Control:
    - visit() returning False prunes the node: none of its supertypes are
      expanded and it is popped immediately (its data is still freed).
    - cancel_iteration() stops the walk after the current visit. The remaining
      stack is abandoned as-is and its node data is not freed.

The loop is iterative with an explicit stack so that every push has exactly one
matching pop and free, in a deterministic order.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from default_method_resolver.models import TypeInfo
from default_method_resolver.type_model import TypeModel

logger = logging.getLogger(__name__)


class HierarchyAlgorithm[D](Protocol):
    """Per-analysis hooks driven by HierarchyWalker."""

    def make_node_data(self, type_info: TypeInfo) -> D:
        """Create the data carried by the node for this type."""
        ...

    def free_node_data(self, data: D) -> None:
        """Release a node's data when the node is popped."""
        ...

    def visit(self, walker: "HierarchyWalker[D]") -> bool:
        """Inspect the current node; return False to skip its supertypes."""
        ...


@dataclass
class _Node[D]:
    """One frame of the walk: a type occurrence on the current path."""

    type_info: TypeInfo
    data: D
    superclass: TypeInfo | None
    interfaces: tuple[TypeInfo, ...]
    super_visited: bool
    interface_index: int = 0

    def has_visited_all_interfaces(self) -> bool:
        return self.interface_index >= len(self.interfaces)

    def is_exhausted(self) -> bool:
        return self.super_visited and self.has_visited_all_interfaces()

    def mark_exhausted(self) -> None:
        self.super_visited = True
        self.interface_index = len(self.interfaces)


class HierarchyWalker[D]:
    """Drives a HierarchyAlgorithm over the ancestry of a root type."""

    def __init__(self, model: TypeModel, algorithm: HierarchyAlgorithm[D]) -> None:
        self._model = model
        self._algorithm = algorithm
        self._path: list[_Node[D]] = []
        self._cancelled = False

    def run(self, root: TypeInfo) -> None:
        """Walk the hierarchy of root, visiting every path occurrence of every supertype."""
        self._reset_iteration()
        self._push(root)
        top_needs_visit = True

        while self._path:
            top = self._path[-1]

            if top_needs_visit:
                top_needs_visit = False
                if not self._algorithm.visit(self):
                    top.mark_exhausted()
                if self._cancelled:
                    logger.debug("Walk of %s cancelled at depth %d", root.name, self.current_depth())
                    return

            if top.is_exhausted():
                self._pop()
                continue

            if not top.super_visited:
                # Mark before pushing so a node never expands its superclass twice
                top.super_visited = True
                next_type = top.superclass
            else:
                next_type = top.interfaces[top.interface_index]
                top.interface_index += 1

            assert next_type is not None, f"{top.type_info.name} has no supertype left to push"
            self._push(next_type)
            top_needs_visit = True

    def cancel_iteration(self) -> None:
        """Stop the walk once the current visit returns."""
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled

    # Accessors available to the algorithm

    def current_depth(self) -> int:
        """Depth of the current node; the root is at depth 0."""
        return len(self._path) - 1

    def type_at_depth(self, levels_up: int) -> TypeInfo | None:
        """Type of the node levels_up steps above the current one (0 = current)."""
        node = self._node_at(levels_up)
        return None if node is None else node.type_info

    def data_at_depth(self, levels_up: int) -> D | None:
        """Data of the node levels_up steps above the current one (0 = current)."""
        node = self._node_at(levels_up)
        return None if node is None else node.data

    def current_type(self) -> TypeInfo:
        assert self._path, "No current node outside of a walk"
        return self._path[-1].type_info

    def current_data(self) -> D:
        assert self._path, "No current node outside of a walk"
        return self._path[-1].data

    def _node_at(self, levels_up: int) -> _Node[D] | None:
        if levels_up < 0 or levels_up >= len(self._path):
            return None
        return self._path[len(self._path) - levels_up - 1]

    def _reset_iteration(self) -> None:
        self._cancelled = False
        self._path.clear()

    def _push(self, type_info: TypeInfo) -> None:
        assert type_info is not None, "Requires a valid type"
        superclass = self._model.superclass(type_info)
        node = _Node(
            type_info=type_info,
            data=self._algorithm.make_node_data(type_info),
            superclass=superclass,
            interfaces=self._model.superinterfaces(type_info),
            super_visited=superclass is None,
        )
        self._path.append(node)

    def _pop(self) -> None:
        self._algorithm.free_node_data(self._path[-1].data)
        self._path.pop()
