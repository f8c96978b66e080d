"""Registration list edits.

The registration list is the list display bound to ``providers`` in the
configuration module, in any of these shapes:

    app_config = ApplicationConfig(providers=[...])
    app_config = {"providers": [...]}
    providers = [...]

find_providers() locates it; merge_state_registration() and
merge_effects_registration() are pure List -> List steps that return the
list object unchanged when the feature is already registered.
add_providers_declaration() is the fallback when no list exists at all.
"""

from __future__ import annotations

import logging

import libcst as cst
import libcst.matchers as m

from storegen.config import DEFAULT_CONFIG, StoregenConfig
from storegen.cst.core import append_item
from storegen.errors import ProvidersShapeError

logger = logging.getLogger(__name__)


def _binding_matcher(name: str, value: m.BaseMatcherNode) -> m.BaseMatcherNode:
    """Match any node binding ``name`` to ``value`` (keyword, dict entry, assignment)."""
    key = m.SimpleString(value=m.MatchIfTrue(lambda text: text.strip("\"'") == name))
    return (
        m.Arg(keyword=m.Name(name), value=value)
        | m.DictElement(key=key, value=value)
        | m.Assign(targets=[m.AssignTarget(target=m.Name(name))], value=value)
        | m.AnnAssign(target=m.Name(name), value=value)
    )


def find_providers(module: cst.Module, name: str = "providers") -> cst.List | None:
    """Find the registration list.

    Args:
        module: Parsed configuration module
        name: Property/variable name holding the list

    Returns:
        First list display bound to ``name`` in document order, or None if
        ``name`` is not bound anywhere

    Raises:
        ProvidersShapeError: If ``name`` is bound only to non-list values
    """
    found = m.findall(module, _binding_matcher(name, m.List()))
    if found:
        return found[0].value  # type: ignore[attr-defined,return-value]

    # A bare annotation ("providers: list") binds nothing
    others = [
        node
        for node in m.findall(module, _binding_matcher(name, m.DoNotCare()))
        if node.value is not None  # type: ignore[attr-defined]
    ]
    if others:
        value = others[0].value  # type: ignore[attr-defined]
        raise ProvidersShapeError(name, module.code_for_node(value))
    return None


def add_providers_declaration(
    module: cst.Module, feature_name: str, config: StoregenConfig = DEFAULT_CONFIG
) -> cst.Module:
    """Append a module-level providers list registering one feature.

    Produces::

        providers = [
            provideState(ordersFeature),
            provideEffects(ordersEffects),
        ]
    """
    statement = cst.parse_statement(
        f"{config.providers_name} = [\n"
        f"    {config.state_callee}({feature_name}Feature),\n"
        f"    {config.effects_callee}({feature_name}Effects),\n"
        "]\n"
    )
    if module.body:
        statement = statement.with_changes(leading_lines=[cst.EmptyLine()])
    return module.with_changes(
        body=[*module.body, statement],
        has_trailing_newline=True,
    )


def _append_element(providers: cst.List, value: cst.BaseExpression) -> cst.List:
    elements = append_item(
        providers.elements,  # type: ignore[arg-type]
        cst.Element(value=value),
        providers.lbracket.whitespace_after,
    )
    return providers.with_changes(elements=elements)


def merge_state_registration(
    module: cst.Module,
    providers: cst.List,
    feature_name: str,
    config: StoregenConfig = DEFAULT_CONFIG,
) -> cst.List:
    """Register the feature's state unless any element mentions it.

    Any element whose source contains ``<feature>Feature`` counts as a
    registration, however it was written.

    Args:
        module: Module the list belongs to (used to render element source)
        providers: Registration list
        feature_name: Canonical feature name
        config: Layout and callee names

    Returns:
        List with ``provideState({"name": ..., "reducer": ...})`` appended,
        or ``providers`` itself
    """
    feature = f"{feature_name}Feature"
    if any(feature in module.code_for_node(el.value) for el in providers.elements):
        return providers

    logger.debug(f"Registering state for {feature}")
    entry = cst.parse_expression(
        f'{config.state_callee}({{"name": {feature}.name, "reducer": {feature}.reducer}})'
    )
    return _append_element(providers, entry)


def find_effects_call(
    providers: cst.List, callee: str = "provideEffects"
) -> tuple[int, cst.Call] | None:
    """Return (index, call) of the first element calling ``callee`` or ``x.callee``."""
    matcher = m.Call(func=m.Name(callee) | m.Attribute(attr=m.Name(callee)))
    for index, element in enumerate(providers.elements):
        if m.matches(element.value, matcher):
            return index, element.value  # type: ignore[return-value]
    return None


def _add_effects_group(module: cst.Module, call: cst.Call, group: str) -> cst.Call:
    """Add ``group`` to an effects call in batched or variadic form."""
    args = call.args
    if len(args) == 1 and not args[0].star and isinstance(args[0].value, cst.List):
        batch = args[0].value
        if any(module.code_for_node(el.value).strip() == group for el in batch.elements):
            return call
        batch = _append_element(batch, cst.Name(group))
        return call.with_changes(args=[args[0].with_changes(value=batch)])

    # Positional arguments end at the first keyword or ** argument
    split = next(
        (i for i, arg in enumerate(args) if arg.keyword is not None or arg.star == "**"),
        len(args),
    )
    if any(module.code_for_node(arg.value).strip() == group for arg in args[:split]):
        return call
    if split == len(args):
        return call.with_changes(
            args=append_item(args, cst.Arg(value=cst.Name(group)), call.whitespace_before_args)
        )

    if split > 0 and isinstance(args[split - 1].comma, cst.Comma):
        separator = args[split - 1].comma
    else:
        separator = cst.Comma(whitespace_after=cst.SimpleWhitespace(" "))
    new_arg = cst.Arg(value=cst.Name(group), comma=separator)
    return call.with_changes(args=[*args[:split], new_arg, *args[split:]])


def merge_effects_registration(
    module: cst.Module,
    providers: cst.List,
    feature_name: str,
    config: StoregenConfig = DEFAULT_CONFIG,
) -> cst.List:
    """Register the feature's effects group.

    The first element calling the effects callee is extended, whether it
    takes one list (``provideEffects([a, b])``) or a flat argument list
    (``provideEffects(a, b)``). In the flat form the group goes after the
    last positional argument, ahead of any keyword or ``**`` arguments.
    Later calls are left alone. With no such
    call, ``provideEffects(<feature>Effects)`` is appended.

    Returns:
        Updated list, or ``providers`` itself if already registered
    """
    group = f"{feature_name}Effects"
    found = find_effects_call(providers, config.effects_callee)
    if found is None:
        logger.debug(f"Adding {config.effects_callee}({group})")
        return _append_element(providers, cst.parse_expression(f"{config.effects_callee}({group})"))

    index, call = found
    updated = _add_effects_group(module, call, group)
    if updated is call:
        return providers

    logger.debug(f"Adding {group} to existing {config.effects_callee} call")
    elements = list(providers.elements)
    elements[index] = elements[index].with_changes(value=updated)
    return providers.with_changes(elements=elements)
