"""Erasure of method signatures declared in hierarchy source files.

A hierarchy file declares methods with ordinary Python annotations. Erasure
reduces each annotation to a bare type name so that generic parameters never
distinguish two declarations: ``list[int]`` and ``list[str]`` both erase to
``list``.
"""

import ast
from collections.abc import Iterator
from enum import Enum, auto

from default_method_resolver.models import make_erased_signature

UNANNOTATED_TYPE = "object"


class ArgumentKind(Enum):
    """Type of function argument."""

    REGULAR = auto()
    POSITIONAL_ONLY = auto()  # before /
    KEYWORD_ONLY = auto()  # after *
    VAR_POSITIONAL = auto()  # *args
    VAR_KEYWORD = auto()  # **kwargs


_ERASED_PREFIX = {
    ArgumentKind.VAR_POSITIONAL: "*",
    ArgumentKind.VAR_KEYWORD: "**",
}


def iter_all_arguments(args: ast.arguments) -> Iterator[tuple[ast.arg, ArgumentKind]]:
    """Iterate over all arguments in the order they appear in a signature.

    Args:
        args: AST arguments node from a function definition

    Yields:
        Tuples of (ast.arg node, ArgumentKind) for each parameter
    """
    for arg in args.posonlyargs:
        yield arg, ArgumentKind.POSITIONAL_ONLY

    for arg in args.args:
        yield arg, ArgumentKind.REGULAR

    if args.vararg is not None:
        yield args.vararg, ArgumentKind.VAR_POSITIONAL

    for arg in args.kwonlyargs:
        yield arg, ArgumentKind.KEYWORD_ONLY

    if args.kwarg is not None:
        yield args.kwarg, ArgumentKind.VAR_KEYWORD


def erase_annotation(annotation: ast.expr | None) -> str:
    """Reduce an annotation expression to its erased type name.

    Examples:
        int -> "int"
        list[int] -> "list"
        collections.abc.Mapping[str, int] -> "collections.abc.Mapping"
        "Node" -> "Node"
        None -> "None"
        (missing) -> "object"
    """
    match annotation:
        case None:
            return UNANNOTATED_TYPE
        case ast.Name(id=name):
            return name
        case ast.Attribute():
            return ast.unparse(annotation)
        case ast.Subscript(value=value):
            return erase_annotation(value)
        case ast.Constant(value=None):
            return "None"
        case ast.Constant(value=str(forward_ref)):
            try:
                parsed = ast.parse(forward_ref, mode="eval")
            except SyntaxError:
                return forward_ref
            return erase_annotation(parsed.body)
        case _:
            return ast.unparse(annotation)


def erase_signature(node: ast.FunctionDef | ast.AsyncFunctionDef, *, has_receiver: bool) -> str:
    """Build the erased signature of a method definition.

    Args:
        node: The method definition
        has_receiver: Whether the first parameter is the implicit self/cls

    Returns:
        Signature string such as "(int,str)bool"
    """
    arguments = list(iter_all_arguments(node.args))
    if has_receiver and arguments and arguments[0][1] in (ArgumentKind.POSITIONAL_ONLY, ArgumentKind.REGULAR):
        arguments = arguments[1:]

    parameter_types = tuple(
        f"{_ERASED_PREFIX.get(kind, '')}{erase_annotation(arg.annotation)}" for arg, kind in arguments
    )
    return make_erased_signature(parameter_types, erase_annotation(node.returns))
