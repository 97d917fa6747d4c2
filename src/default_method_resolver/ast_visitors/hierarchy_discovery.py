"""AST-based discovery of class and interface declarations in hierarchy files.

A hierarchy file describes a type model with Python stub syntax:

    @interface
    class Greeter:
        def greet(self, name: str) -> str:
            return "hello " + name

    @interface
    class Named:
        def greet(self, name: str) -> str: ...

    class Person(Greeter, Named):
        pass

Rules:
    - Each module-level class statement declares one type; @interface marks an interface
    - A class has at most one class base (its superclass); every other base must be an
      interface, and bases keep their declared order
    - Each def in a type body is a method; @staticmethod makes it static
    - A body that is only a docstring and/or ``...``, or an @abstractmethod decorator,
      means the method has no concrete body
    - Names starting with ``__`` (but not dunders) are private, names starting with a
      single ``_`` are package-visible, all others are public

Nested classes and module-level functions carry no hierarchy information and are skipped.
"""

import ast
import logging
from dataclasses import dataclass
from typing import override

from default_method_resolver.ast_arguments import erase_annotation, erase_signature
from default_method_resolver.models import MethodInfo, TypeInfo, TypeKind, Visibility
from default_method_resolver.type_model import (
    DEFAULT_ROOT_TYPE_NAME,
    HierarchyDefinitionError,
    TypeRegistry,
    build_type_registry,
)

logger = logging.getLogger(__name__)

INTERFACE_DECORATOR = "interface"


@dataclass(frozen=True)
class TypeDeclaration:
    """A type as written in the source, before its bases are classified."""

    name: str
    kind: TypeKind
    base_names: tuple[str, ...]
    methods: tuple[MethodInfo, ...]
    line_number: int


def _decorator_name(decorator: ast.expr) -> str | None:
    """Return the simple name of a decorator like @foo, @mod.foo, or @foo(...)."""
    match decorator:
        case ast.Name(id=name):
            return name
        case ast.Attribute(attr=name):
            return name
        case ast.Call(func=func):
            return _decorator_name(func)
        case _:
            return None


def _method_visibility(name: str) -> Visibility:
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PACKAGE
    return Visibility.PUBLIC


def _has_concrete_body(body: list[ast.stmt]) -> bool:
    """Check whether a method body does more than hold a docstring or ``...``."""
    statements = body
    match statements:
        case [ast.Expr(value=ast.Constant(value=str())), *rest]:
            statements = rest
    match statements:
        case []:
            return False
        case [ast.Expr(value=ast.Constant(value=value))]:
            return value is not Ellipsis
        case _:
            return True


def _make_method(type_name: str, node: ast.FunctionDef | ast.AsyncFunctionDef) -> MethodInfo:
    decorators = {_decorator_name(d) for d in node.decorator_list}
    is_static = "staticmethod" in decorators
    return MethodInfo(
        declaring_type=type_name,
        name=node.name,
        signature=erase_signature(node, has_receiver=not is_static),
        visibility=_method_visibility(node.name),
        is_static=is_static,
        has_body="abstractmethod" not in decorators and _has_concrete_body(node.body),
    )


class HierarchyDiscoveryVisitor(ast.NodeVisitor):
    """Collects module-level type declarations in source order."""

    def __init__(self) -> None:
        super().__init__()
        self.declarations: list[TypeDeclaration] = []

    @override
    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        """Record a type and its methods; nested classes are not visited."""
        is_interface = any(_decorator_name(d) == INTERFACE_DECORATOR for d in node.decorator_list)
        methods = tuple(
            _make_method(node.name, statement)
            for statement in node.body
            if isinstance(statement, ast.FunctionDef | ast.AsyncFunctionDef)
        )
        declaration = TypeDeclaration(
            name=node.name,
            kind=TypeKind.INTERFACE if is_interface else TypeKind.CLASS,
            base_names=tuple(erase_annotation(base) for base in node.bases),
            methods=methods,
            line_number=node.lineno,
        )
        logger.debug("Discovered %s %s at line %d", declaration.kind.name.lower(), node.name, node.lineno)
        self.declarations.append(declaration)

    @override
    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        """Module-level functions declare no types."""

    @override
    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        """Module-level functions declare no types."""


def _classify_bases(
    declaration: TypeDeclaration, kinds: dict[str, TypeKind], root_type_name: str
) -> tuple[str | None, tuple[str, ...]]:
    """Split a declaration's bases into (superclass, superinterfaces)."""
    superclass: str | None = None
    interfaces: list[str] = []
    for base in declaration.base_names:
        kind = kinds.get(base)
        if kind is None and base == root_type_name:
            kind = TypeKind.CLASS
        if kind is None:
            msg = f"Line {declaration.line_number}: {declaration.name} has unknown base {base}"
            raise HierarchyDefinitionError(msg)

        if kind == TypeKind.INTERFACE:
            interfaces.append(base)
            continue
        if declaration.kind == TypeKind.INTERFACE:
            msg = f"Line {declaration.line_number}: interface {declaration.name} cannot extend class {base}"
            raise HierarchyDefinitionError(msg)
        if superclass is not None:
            msg = f"Line {declaration.line_number}: {declaration.name} has two superclasses, {superclass} and {base}"
            raise HierarchyDefinitionError(msg)
        superclass = base
    return superclass, tuple(interfaces)


def build_hierarchy_registry(tree: ast.Module, *, root_type_name: str = DEFAULT_ROOT_TYPE_NAME) -> TypeRegistry:
    """Build a validated type registry from a parsed hierarchy file.

    Args:
        tree: Parsed hierarchy file
        root_type_name: Name of the universal root class

    Returns:
        TypeRegistry with every declared type (plus a synthesized root if needed)

    Raises:
        HierarchyDefinitionError: If the declarations do not form a valid hierarchy
    """
    visitor = HierarchyDiscoveryVisitor()
    visitor.visit(tree)

    kinds: dict[str, TypeKind] = {}
    for declaration in visitor.declarations:
        kinds.setdefault(declaration.name, declaration.kind)

    types: list[TypeInfo] = []
    for declaration in visitor.declarations:
        superclass, interfaces = _classify_bases(declaration, kinds, root_type_name)
        types.append(
            TypeInfo(
                name=declaration.name,
                kind=declaration.kind,
                superclass_name=superclass,
                interface_names=interfaces,
                methods=declaration.methods,
            )
        )

    return build_type_registry(types, root_type_name=root_type_name)
