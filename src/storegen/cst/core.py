"""Shared LibCST parsing utilities.

Provides parse_file and parse_source as the entry points for all
CST-based editing in the storegen.cst package, plus append_item for
growing comma-separated sequences without disturbing their layout.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

import libcst as cst

from storegen.errors import ConfigNotFoundError, ConfigParseError

_Item = TypeVar("_Item", cst.Element, cst.Arg, cst.ImportAlias)


def parse_file(path: Path) -> cst.Module:
    """Parse a Python source file into a LibCST Module.

    The file is read as bytes so encoding and line endings survive the
    round trip through ``Module.bytes``.

    Args:
        path: Path to a Python file

    Returns:
        LibCST Module (lossless CST with whitespace preservation)

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigParseError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFoundError(path)
    try:
        return cst.parse_module(path.read_bytes())
    except cst.ParserSyntaxError as e:
        raise ConfigParseError(path, str(e)) from e


def parse_source(code: str) -> cst.Module:
    """Parse Python source code string into a LibCST Module.

    Args:
        code: Python source code as a string

    Returns:
        LibCST Module (lossless CST with whitespace preservation)

    Raises:
        libcst.ParserSyntaxError: If the code cannot be parsed

    Example:
        >>> module = parse_source("providers = []\\n")
        >>> module.code
        'providers = []\\n'
    """
    return cst.parse_module(code)


def append_item(
    items: Sequence[_Item],
    item: _Item,
    opener: cst.BaseParenthesizableWhitespace | None = None,
) -> tuple[_Item, ...]:
    """Append an element, argument or import alias to a comma-separated sequence.

    The new item takes over the old last item's trailing comma (if any), and
    the old last item gets the separator used between earlier items. That
    keeps ``[a, b]`` on one line and a one-per-line list one-per-line.

    Args:
        items: Existing sequence (List.elements, Call.args, ImportFrom.names)
        item: Item to append, without a comma
        opener: Whitespace after the opening bracket; used as the separator
            when a single multi-line item has no sibling to copy from

    Returns:
        New tuple of items
    """
    if not items:
        return (item,)

    last = items[-1]
    if len(items) > 1 and isinstance(items[-2].comma, cst.Comma):
        separator = items[-2].comma
    elif (
        opener is not None
        and isinstance(last.comma, cst.Comma)
        and isinstance(last.comma.whitespace_after, cst.ParenthesizedWhitespace)
    ):
        separator = cst.Comma(whitespace_after=opener)
    else:
        separator = cst.Comma(whitespace_after=cst.SimpleWhitespace(" "))

    return (
        *items[:-1],
        last.with_changes(comma=separator),
        item.with_changes(comma=last.comma),
    )
