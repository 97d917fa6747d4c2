"""Main analysis orchestrator: hierarchy file in, method resolutions out."""

import logging
from pathlib import Path

from default_method_resolver.ast_visitors.hierarchy_discovery import build_hierarchy_registry
from default_method_resolver.ast_visitors.parse_ast import parse_ast_from_file, parse_ast_from_source
from default_method_resolver.models import AnalysisResult, MethodResolution, NoMatchFound
from default_method_resolver.resolver import collect_method_signatures, resolve, resolve_all_methods
from default_method_resolver.type_model import DEFAULT_ROOT_TYPE_NAME, TypeRegistry

logger = logging.getLogger(__name__)


def load_hierarchy_source(
    source: str, filename: str = "<hierarchy>", *, root_type_name: str = DEFAULT_ROOT_TYPE_NAME
) -> TypeRegistry | None:
    """Build a type registry from hierarchy source code.

    Returns:
        The registry, or None if the source has a syntax error

    Raises:
        HierarchyDefinitionError: If the declarations do not form a valid hierarchy
    """
    tree = parse_ast_from_source(source, filename)
    if tree is None:
        return None
    return build_hierarchy_registry(tree, root_type_name=root_type_name)


def load_hierarchy_file(file_path: Path, *, root_type_name: str = DEFAULT_ROOT_TYPE_NAME) -> TypeRegistry | None:
    """Build a type registry from a hierarchy file.

    Returns:
        The registry, or None if the file is missing, unreadable, or not valid Python

    Raises:
        HierarchyDefinitionError: If the declarations do not form a valid hierarchy
    """
    tree = parse_ast_from_file(file_path)
    if tree is None:
        return None
    return build_hierarchy_registry(tree, root_type_name=root_type_name)


def analyze_hierarchy(
    registry: TypeRegistry,
    root_name: str,
    *,
    method_name: str | None = None,
    signature: str | None = None,
) -> AnalysisResult:
    """Resolve methods of a root type.

    Args:
        registry: Type model to resolve against
        root_name: Type the calls are dispatched on
        method_name: Only resolve methods with this name (default: every method)
        signature: Only resolve this erased signature; requires method_name

    Returns:
        AnalysisResult with one resolution per (name, signature), in discovery order.
        A requested method that does not exist anywhere in the hierarchy yields a
        single NoMatchFound resolution.

    Raises:
        UnknownTypeError: If root_name is not registered
        ValueError: If signature is given without method_name
    """
    if signature is not None and method_name is None:
        msg = "A signature can only be resolved together with a method name"
        raise ValueError(msg)

    root = registry.get(root_name)

    if method_name is None:
        return AnalysisResult(root=root_name, resolutions=resolve_all_methods(registry, root))

    if signature is not None:
        outcome = resolve(registry, root, method_name, signature)
        resolution = MethodResolution(name=method_name, signature=signature, outcome=outcome)
        return AnalysisResult(root=root_name, resolutions=(resolution,))

    signatures = [sig for name, sig in collect_method_signatures(registry, root) if name == method_name]
    if not signatures:
        logger.debug("No method named %s in the hierarchy of %s", method_name, root_name)
        return AnalysisResult(
            root=root_name,
            resolutions=(MethodResolution(name=method_name, signature="", outcome=NoMatchFound()),),
        )

    return AnalysisResult(
        root=root_name,
        resolutions=tuple(
            MethodResolution(name=method_name, signature=sig, outcome=resolve(registry, root, method_name, sig))
            for sig in signatures
        ),
    )
