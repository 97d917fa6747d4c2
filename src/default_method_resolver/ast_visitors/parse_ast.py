"""Reading and parsing hierarchy source files.

Hierarchy files are Python stubs that are parsed, never imported or executed.
Both helpers return None on failure (missing file, unreadable bytes, syntax
error) so callers decide how to report it.
"""

import ast
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_ast_from_source(source: str, filename: str) -> ast.Module | None:
    """Parse hierarchy source code into an AST.

    Args:
        source: Python source code as a string
        filename: Filename to use in error messages

    Returns:
        The parsed module, or None on syntax error
    """
    try:
        return ast.parse(source, filename=filename)
    except SyntaxError as e:
        logger.debug("Syntax error in %s: %s", filename, e)
        return None


def parse_ast_from_file(file_path: Path) -> ast.Module | None:
    """Read and parse a hierarchy file.

    Returns:
        The parsed module, or None if the file is missing, unreadable, or invalid
    """
    if not file_path.exists():
        return None

    try:
        source_code = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    return parse_ast_from_source(source_code, str(file_path))
