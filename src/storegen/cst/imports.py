"""Idempotent import reconciliation.

Two pure Module -> Module steps:
- ensure_named_import: ``from path import name`` (set semantics on bindings)
- ensure_namespace_import: ``import path as alias`` (replaces a named form)

Both return the module object unchanged when nothing needs to be done, so
callers can detect edits with ``is``. Only top-level imports are considered.
"""

from __future__ import annotations

import logging

import libcst as cst
import libcst.matchers as m
from libcst.helpers import get_full_name_for_node

from storegen.cst.core import append_item

logger = logging.getLogger(__name__)

_DOCSTRING = m.SimpleStatementLine(
    body=[m.Expr(value=m.SimpleString() | m.ConcatenatedString())]
)


def _import_from_path(node: cst.ImportFrom) -> str:
    """Dotted module path of a from-import, including leading dots."""
    dots = "." * len(node.relative)
    if node.module is None:
        return dots
    return dots + (get_full_name_for_node(node.module) or "")


def _top_level_imports(module: cst.Module) -> list[cst.Import | cst.ImportFrom]:
    found: list[cst.Import | cst.ImportFrom] = []
    for stmt in module.body:
        if isinstance(stmt, cst.SimpleStatementLine):
            found.extend(
                small for small in stmt.body if isinstance(small, (cst.Import, cst.ImportFrom))
            )
    return found


def find_named_import(module: cst.Module, path: str) -> cst.ImportFrom | None:
    """Return the first ``from path import ...`` with named bindings, or None."""
    for node in _top_level_imports(module):
        if (
            isinstance(node, cst.ImportFrom)
            and not isinstance(node.names, cst.ImportStar)
            and _import_from_path(node) == path
        ):
            return node
    return None


def find_namespace_import(module: cst.Module, path: str) -> cst.Import | None:
    """Return the first ``import path`` / ``import path as x``, or None."""
    for node in _top_level_imports(module):
        if isinstance(node, cst.Import) and any(
            alias.evaluated_name == path for alias in node.names
        ):
            return node
    return None


def imported_names(node: cst.ImportFrom) -> list[str]:
    """Names bound by a from-import, by imported (not alias) name."""
    if isinstance(node.names, cst.ImportStar):
        return []
    return [alias.evaluated_name for alias in node.names]


def _insert_import(module: cst.Module, statement: cst.SimpleStatementLine) -> cst.Module:
    """Insert an import line after the last top-level import.

    Without imports the line goes after the module docstring (separated by a
    blank line), or at the very top.
    """
    body = list(module.body)
    index = 0
    for i, stmt in enumerate(body):
        if isinstance(stmt, cst.SimpleStatementLine) and any(
            isinstance(small, (cst.Import, cst.ImportFrom)) for small in stmt.body
        ):
            index = i + 1

    if index == 0 and body and m.matches(body[0], _DOCSTRING):
        index = 1
        statement = statement.with_changes(leading_lines=[cst.EmptyLine()])

    body.insert(index, statement)
    return module.with_changes(body=body)


def _warn_if_aliased(node: cst.ImportFrom, path: str, name: str) -> None:
    """Warn when ``name`` is only bound under another name (``import A as B``)."""
    for alias in node.names:  # type: ignore[union-attr]
        if alias.evaluated_name == name and alias.asname is not None:
            logger.warning(
                f"{name} is imported from {path} as {alias.evaluated_alias}; "
                f"registrations refer to {name}, which is not bound"
            )


def ensure_named_import(module: cst.Module, path: str, name: str) -> cst.Module:
    """Make sure ``name`` is imported from ``path`` with a from-import.

    If a named from-import of ``path`` exists, ``name`` is added to its
    bindings unless already there. A namespace import of the same path does
    not count: a new from-import is added next to it.

    Args:
        module: Module to edit
        path: Dotted module path, e.g. "statekit.store"
        name: Binding to import, e.g. "provideState"

    Returns:
        Edited module, or ``module`` itself if already satisfied
    """
    existing = find_named_import(module, path)
    if existing is not None:
        if name in imported_names(existing):
            _warn_if_aliased(existing, path, name)
            return module
        names = append_item(
            existing.names,  # type: ignore[arg-type]
            cst.ImportAlias(name=cst.Name(name)),
            existing.lpar.whitespace_after if existing.lpar else None,
        )
        logger.debug(f"Adding {name} to existing import from {path}")
        return module.deep_replace(existing, existing.with_changes(names=names))  # type: ignore[return-value]

    logger.debug(f"Adding import: from {path} import {name}")
    return _insert_import(module, cst.parse_statement(f"from {path} import {name}\n"))  # type: ignore[arg-type]


def ensure_namespace_import(module: cst.Module, path: str, alias: str) -> cst.Module:
    """Make sure ``path`` is imported as a whole module.

    An existing ``import path [as x]`` is left untouched. An existing
    from-import of ``path`` is replaced in place by ``import path as alias``;
    its named bindings are dropped.

    Args:
        module: Module to edit
        path: Dotted module path of the effects module
        alias: Name to bind the module to

    Returns:
        Edited module, or ``module`` itself if already satisfied
    """
    if find_namespace_import(module, path) is not None:
        return module

    statement = cst.parse_statement(f"import {path} as {alias}\n")
    named = find_named_import(module, path)
    if named is not None:
        dropped = ", ".join(imported_names(named))
        logger.info(f"Replacing 'from {path} import {dropped}' with namespace import {alias}")
        return module.deep_replace(named, statement.body[0])  # type: ignore[attr-defined,return-value]

    logger.debug(f"Adding import: import {path} as {alias}")
    return _insert_import(module, statement)  # type: ignore[arg-type]
