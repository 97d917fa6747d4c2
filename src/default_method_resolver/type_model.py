"""Type model: declared methods, superclass, and superinterfaces of each type.

The resolution core only talks to the TypeModel protocol. TypeRegistry is the
in-memory implementation built from parsed hierarchy files (or directly from
TypeInfo objects in tests).

Key Components:
    - TypeModel: Protocol consumed by the walker and the resolver
    - TypeRegistry: Immutable, validated name -> TypeInfo mapping
    - build_type_registry: Factory that validates types and inserts the universal root
    - find_declared_method: Lookup of a method by name and erased signature
"""

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

from default_method_resolver.models import MethodInfo, TypeInfo, TypeKind

DEFAULT_ROOT_TYPE_NAME = "Object"


class HierarchyDefinitionError(ValueError):
    """A set of type declarations does not form a valid hierarchy."""


class UnknownTypeError(LookupError):
    """A type name is not registered in the type model."""


class TypeModel(Protocol):
    """Read-only source of type structure.

    Every query must be deterministic and free of side effects.
    """

    def declared_methods(self, type_info: TypeInfo) -> tuple[MethodInfo, ...]: ...

    def superclass(self, type_info: TypeInfo) -> TypeInfo | None: ...

    def superinterfaces(self, type_info: TypeInfo) -> tuple[TypeInfo, ...]: ...


@dataclass(frozen=True)
class TypeRegistry:
    """Registry of every type in an analyzed hierarchy."""

    types: Mapping[str, TypeInfo]
    root_type_name: str = DEFAULT_ROOT_TYPE_NAME

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def get(self, name: str) -> TypeInfo:
        """Look up a type by name.

        Raises:
            UnknownTypeError: If no type with that name is registered
        """
        try:
            return self.types[name]
        except KeyError:
            msg = f"Unknown type: {name!r}"
            raise UnknownTypeError(msg) from None

    def type_names(self) -> tuple[str, ...]:
        """Names of all registered types, in registration order."""
        return tuple(self.types)

    def declared_methods(self, type_info: TypeInfo) -> tuple[MethodInfo, ...]:
        return type_info.methods

    def superclass(self, type_info: TypeInfo) -> TypeInfo | None:
        if type_info.superclass_name is None:
            return None
        return self.get(type_info.superclass_name)

    def superinterfaces(self, type_info: TypeInfo) -> tuple[TypeInfo, ...]:
        return tuple(self.get(name) for name in type_info.interface_names)


def find_declared_method(model: TypeModel, type_info: TypeInfo, name: str, signature: str) -> MethodInfo | None:
    """Find the method declared directly on a type with this name and erased signature."""
    return next(
        (m for m in model.declared_methods(type_info) if m.name == name and m.signature == signature),
        None,
    )


def _with_root_superclass(type_info: TypeInfo, root_type_name: str) -> TypeInfo:
    """Give a class without a superclass the universal root as its superclass."""
    if type_info.kind != TypeKind.CLASS or type_info.superclass_name is not None:
        return type_info
    if type_info.name == root_type_name:
        return type_info
    return dataclasses.replace(type_info, superclass_name=root_type_name)


def _check_supertypes(type_info: TypeInfo, types: Mapping[str, TypeInfo]) -> None:
    """Validate that a type's direct supertypes exist and have the right kinds."""
    if type_info.superclass_name is not None:
        if type_info.is_interface:
            msg = f"Interface {type_info.name} cannot have a superclass"
            raise HierarchyDefinitionError(msg)
        superclass = types.get(type_info.superclass_name)
        if superclass is None:
            msg = f"{type_info.name} extends unknown type {type_info.superclass_name}"
            raise HierarchyDefinitionError(msg)
        if superclass.is_interface:
            msg = f"{type_info.name} uses interface {superclass.name} as its superclass"
            raise HierarchyDefinitionError(msg)

    for interface_name in type_info.interface_names:
        interface = types.get(interface_name)
        if interface is None:
            msg = f"{type_info.name} implements unknown type {interface_name}"
            raise HierarchyDefinitionError(msg)
        if not interface.is_interface:
            msg = f"{type_info.name} lists class {interface_name} as a superinterface"
            raise HierarchyDefinitionError(msg)

    seen: set[MethodInfo] = set()
    for method in type_info.methods:
        if method in seen:
            msg = f"{method} is declared more than once"
            raise HierarchyDefinitionError(msg)
        seen.add(method)


def _check_acyclic(types: Mapping[str, TypeInfo]) -> None:
    """Reject supertype cycles, which would make every hierarchy walk endless."""
    finished: set[str] = set()
    for start in types:
        if start in finished:
            continue
        on_path: set[str] = {start}
        stack: list[tuple[str, list[str]]] = [(start, _direct_supertypes(types[start]))]
        while stack:
            name, pending = stack[-1]
            if not pending:
                stack.pop()
                on_path.discard(name)
                finished.add(name)
                continue
            parent = pending.pop(0)
            if parent in on_path:
                msg = f"Cyclic inheritance involving {parent}"
                raise HierarchyDefinitionError(msg)
            if parent not in finished:
                on_path.add(parent)
                stack.append((parent, _direct_supertypes(types[parent])))


def _direct_supertypes(type_info: TypeInfo) -> list[str]:
    supers = [type_info.superclass_name] if type_info.superclass_name is not None else []
    return [*supers, *type_info.interface_names]


def build_type_registry(
    types: Iterable[TypeInfo], *, root_type_name: str = DEFAULT_ROOT_TYPE_NAME
) -> TypeRegistry:
    """Validate type declarations and build a registry from them.

    Classes declared without a superclass are attached to the universal root
    type. If the root type itself is not among the declarations, an empty root
    class is synthesized.

    Args:
        types: Type declarations, in declaration order
        root_type_name: Name of the universal root class

    Returns:
        Immutable TypeRegistry implementing TypeModel

    Raises:
        HierarchyDefinitionError: If names are duplicated, supertypes are
            unknown or of the wrong kind, a method is declared twice on one
            type, or the supertype graph has a cycle
    """
    registered: dict[str, TypeInfo] = {}
    for type_info in types:
        if type_info.name in registered:
            msg = f"Type {type_info.name} is declared more than once"
            raise HierarchyDefinitionError(msg)
        registered[type_info.name] = _with_root_superclass(type_info, root_type_name)

    root = registered.get(root_type_name)
    if root is None:
        registered[root_type_name] = TypeInfo(
            name=root_type_name,
            kind=TypeKind.CLASS,
            superclass_name=None,
            interface_names=(),
            methods=(),
        )
    elif root.is_interface or root.superclass_name is not None:
        msg = f"Root type {root_type_name} must be a class without a superclass"
        raise HierarchyDefinitionError(msg)

    for type_info in registered.values():
        _check_supertypes(type_info, registered)
    _check_acyclic(registered)

    return TypeRegistry(types=registered, root_type_name=root_type_name)
