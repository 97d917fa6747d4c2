"""Test helper utilities."""

from .console import assert_console_contains, capture_console_output
from .factories import (
    make_class,
    make_interface,
    make_method,
    make_registry,
)
from .hierarchies import registry_from_source, resolve_in_source
from .temp_files import temp_hierarchy_file

__all__ = [
    "assert_console_contains",
    "capture_console_output",
    "make_class",
    "make_interface",
    "make_method",
    "make_registry",
    "registry_from_source",
    "resolve_in_source",
    "temp_hierarchy_file",
]
