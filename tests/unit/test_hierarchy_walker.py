"""Unit tests for the generic hierarchy walker."""

import pytest

from default_method_resolver.hierarchy_walker import HierarchyWalker
from default_method_resolver.models import TypeInfo
from default_method_resolver.type_model import TypeRegistry
from tests.helpers.factories import make_class, make_interface, make_registry


class RecordingAlgorithm:
    """Records every hook call; optionally prunes or cancels at named types."""

    def __init__(self, *, prune: frozenset[str] = frozenset(), cancel_at: str | None = None) -> None:
        self.prune = prune
        self.cancel_at = cancel_at
        self.visited: list[str] = []
        self.depths: list[int] = []
        self.paths: list[tuple[str, ...]] = []
        self.created: list[str] = []
        self.freed: list[str] = []

    def make_node_data(self, type_info: TypeInfo) -> str:
        self.created.append(type_info.name)
        return type_info.name

    def free_node_data(self, data: str) -> None:
        self.freed.append(data)

    def visit(self, walker: HierarchyWalker[str]) -> bool:
        name = walker.current_type().name
        assert walker.current_data() == name
        self.visited.append(name)
        self.depths.append(walker.current_depth())

        path: list[str] = []
        levels_up = 0
        while (type_info := walker.type_at_depth(levels_up)) is not None:
            assert walker.data_at_depth(levels_up) == type_info.name
            path.append(type_info.name)
            levels_up += 1
        self.paths.append(tuple(path))

        if name == self.cancel_at:
            walker.cancel_iteration()
        return name not in self.prune


@pytest.fixture
def registry() -> TypeRegistry:
    """R extends C implements I1, I2; C implements I3; I1 extends I3."""
    return make_registry(
        make_interface("I3"),
        make_interface("I1", extends=("I3",)),
        make_interface("I2"),
        make_class("C", implements=("I3",)),
        make_class("R", superclass="C", implements=("I1", "I2")),
    )


def walk(registry: TypeRegistry, root: str, algorithm: RecordingAlgorithm) -> HierarchyWalker[str]:
    walker = HierarchyWalker(registry, algorithm)
    walker.run(registry.get(root))
    return walker


def test_visits_superclass_before_interfaces(registry: TypeRegistry) -> None:
    """Test that each node expands its superclass chain before its interfaces."""
    algorithm = RecordingAlgorithm()
    walk(registry, "R", algorithm)

    assert algorithm.visited == ["R", "C", "Object", "I3", "I1", "I3", "I2"]
    assert algorithm.depths == [0, 1, 2, 2, 1, 2, 1]


def test_revisits_interfaces_reachable_along_several_paths(registry: TypeRegistry) -> None:
    """Test that a shared superinterface gets one node per path occurrence."""
    algorithm = RecordingAlgorithm()
    walk(registry, "R", algorithm)

    assert algorithm.visited.count("I3") == 2
    assert algorithm.created.count("I3") == 2
    assert algorithm.freed.count("I3") == 2


def test_frees_every_node_once_in_pop_order(registry: TypeRegistry) -> None:
    """Test that node data is freed exactly once per push, children before parents."""
    algorithm = RecordingAlgorithm()
    walk(registry, "R", algorithm)

    assert algorithm.freed == ["Object", "I3", "C", "I3", "I1", "I2", "R"]
    assert sorted(algorithm.freed) == sorted(algorithm.created)


def test_depth_accessors_expose_current_path(registry: TypeRegistry) -> None:
    """Test that type_at_depth walks from the current node back to the root."""
    algorithm = RecordingAlgorithm()
    walk(registry, "R", algorithm)

    assert algorithm.paths == [
        ("R",),
        ("C", "R"),
        ("Object", "C", "R"),
        ("I3", "C", "R"),
        ("I1", "R"),
        ("I3", "I1", "R"),
        ("I2", "R"),
    ]


def test_pruned_node_is_popped_without_expanding(registry: TypeRegistry) -> None:
    """Test that visit() returning False skips the node's supertypes but still frees it."""
    algorithm = RecordingAlgorithm(prune=frozenset({"C"}))
    walk(registry, "R", algorithm)

    assert algorithm.visited == ["R", "C", "I1", "I3", "I2"]
    assert algorithm.freed == ["C", "I3", "I1", "I2", "R"]


def test_pruning_the_root_ends_the_walk(registry: TypeRegistry) -> None:
    """Test that pruning the root visits nothing else."""
    algorithm = RecordingAlgorithm(prune=frozenset({"R"}))
    walk(registry, "R", algorithm)

    assert algorithm.visited == ["R"]
    assert algorithm.freed == ["R"]


def test_cancellation_stops_visiting_and_abandons_the_stack(registry: TypeRegistry) -> None:
    """Test that cancel_iteration() stops the walk without freeing the remaining nodes."""
    algorithm = RecordingAlgorithm(cancel_at="Object")
    walker = walk(registry, "R", algorithm)

    assert walker.is_cancelled()
    assert algorithm.visited == ["R", "C", "Object"]
    assert algorithm.created == ["R", "C", "Object"]
    assert algorithm.freed == []


def test_cancellation_after_some_pops(registry: TypeRegistry) -> None:
    """Test that nodes popped before cancellation were freed normally."""
    algorithm = RecordingAlgorithm(cancel_at="I1")
    walk(registry, "R", algorithm)

    assert algorithm.visited == ["R", "C", "Object", "I3", "I1"]
    assert algorithm.freed == ["Object", "I3", "C"]


def test_run_resets_previous_state(registry: TypeRegistry) -> None:
    """Test that a walker can be reused after a cancelled run."""
    algorithm = RecordingAlgorithm(cancel_at="C")
    walker = HierarchyWalker(registry, algorithm)
    walker.run(registry.get("R"))
    assert walker.is_cancelled()

    algorithm.cancel_at = None
    algorithm.visited.clear()
    walker.run(registry.get("R"))

    assert not walker.is_cancelled()
    assert algorithm.visited == ["R", "C", "Object", "I3", "I1", "I3", "I2"]


def test_interface_root_has_no_superclass(registry: TypeRegistry) -> None:
    """Test that walking from an interface never reaches the root class."""
    algorithm = RecordingAlgorithm()
    walk(registry, "I1", algorithm)

    assert algorithm.visited == ["I1", "I3"]


def test_root_type_alone(registry: TypeRegistry) -> None:
    """Test walking the universal root, which has no supertypes."""
    algorithm = RecordingAlgorithm()
    walk(registry, "Object", algorithm)

    assert algorithm.visited == ["Object"]
    assert algorithm.freed == ["Object"]


def test_accessors_outside_a_walk(registry: TypeRegistry) -> None:
    """Test accessor behavior when no walk is in progress."""
    walker = HierarchyWalker(registry, RecordingAlgorithm())
    walker.run(registry.get("R"))

    assert walker.current_depth() == -1
    assert walker.type_at_depth(0) is None
    assert walker.data_at_depth(0) is None
    with pytest.raises(AssertionError, match="No current node"):
        walker.current_type()
