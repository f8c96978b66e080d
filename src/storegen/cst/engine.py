"""Register a feature in the application's configuration module.

augment() runs the whole pipeline against the file on disk:

    Loaded -> ImportsReconciled -> ListLocated -> CreatedFresh | Merged -> Persisted

augment_module() is the same pipeline without I/O, for callers and tests
that already hold a parsed module. Every step is idempotent, so running
augment() twice for one feature leaves the file byte-for-byte as after the
first run.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import libcst as cst

from storegen.config import DEFAULT_CONFIG, StoregenConfig
from storegen.cst.core import parse_file
from storegen.cst.imports import ensure_named_import, ensure_namespace_import
from storegen.cst.providers import (
    add_providers_declaration,
    find_providers,
    merge_effects_registration,
    merge_state_registration,
)
from storegen.models import AugmentResult

logger = logging.getLogger(__name__)


def reconcile_imports(
    module: cst.Module, feature_name: str, config: StoregenConfig = DEFAULT_CONFIG
) -> tuple[cst.Module, list[str]]:
    """Ensure the infrastructure, feature and effects imports are present.

    Returns:
        (module, imports_added) where imports_added lists each import that
        was added or rewritten, as "from x import y" / "import x as y"
    """
    added: list[str] = []
    named = [
        (config.effects_module, config.effects_callee),
        (config.state_module, config.state_callee),
        (config.feature_module(feature_name), f"{feature_name}Feature"),
    ]
    for path, name in named:
        updated = ensure_named_import(module, path, name)
        if updated is not module:
            added.append(f"from {path} import {name}")
        module = updated

    path = config.effects_module_path(feature_name)
    alias = f"{feature_name}Effects"
    updated = ensure_namespace_import(module, path, alias)
    if updated is not module:
        added.append(f"import {path} as {alias}")
    return updated, added


def augment_module(
    module: cst.Module,
    feature_name: str,
    config: StoregenConfig = DEFAULT_CONFIG,
    config_path: str = "",
) -> tuple[cst.Module, AugmentResult]:
    """Register ``feature_name`` in a parsed configuration module.

    Args:
        module: Parsed configuration module
        feature_name: Canonical feature name (see storegen.naming.normalize)
        config: Layout and infrastructure names
        config_path: Path reported in the result

    Returns:
        (new_module, result). ``result.changed`` is filled in by the caller
        comparing serialized output.

    Raises:
        ProvidersShapeError: If ``providers`` is bound to a non-list value
    """
    result = AugmentResult(feature_name=feature_name, config_path=config_path)

    module, result.imports_added = reconcile_imports(module, feature_name, config)
    logger.debug(f"{feature_name}: imports reconciled ({len(result.imports_added)} added)")

    providers = find_providers(module, config.providers_name)
    if providers is None:
        logger.info(f"No {config.providers_name} list found, creating one")
        result.providers_created = True
        result.state_registered = True
        result.effects_registered = True
        return add_providers_declaration(module, feature_name, config), result

    logger.debug(f"{feature_name}: {config.providers_name} list located")
    with_state = merge_state_registration(module, providers, feature_name, config)
    merged = merge_effects_registration(module, with_state, feature_name, config)
    result.state_registered = with_state is not providers
    result.effects_registered = merged is not with_state

    if merged is not providers:
        module = module.deep_replace(providers, merged)  # type: ignore[assignment]
    return module, result


def write_atomic(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` via a temp file in the same directory.

    Readers see either the old or the new content, never a partial write.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if path.exists():
            tmp.chmod(path.stat().st_mode & 0o777)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def augment(
    feature_name: str,
    project_root: Path,
    config: StoregenConfig | None = None,
) -> AugmentResult:
    """Register a feature in ``<root>/src/<app>/app_config.py``.

    Adds the provideState/provideEffects imports, the feature and effects
    imports, a state registration and an effects registration. Already
    present pieces are left alone.

    Args:
        feature_name: Canonical feature name
        project_root: Root of the application project
        config: Layout; defaults to StoregenConfig()

    Returns:
        AugmentResult describing the edits

    Raises:
        ConfigNotFoundError: If the configuration module does not exist
        ConfigParseError: If it is not valid Python
        ProvidersShapeError: If ``providers`` is not a list literal

    Example:
        >>> augment("orders", Path("my-app"))  # doctest: +SKIP
        AugmentResult(feature_name='orders', ..., changed=True)
    """
    config = config or DEFAULT_CONFIG
    path = config.config_path(project_root)

    module = parse_file(path)
    logger.debug(f"Loaded {path}")

    new_module, result = augment_module(module, feature_name, config, str(path))

    original = module.bytes
    updated = new_module.bytes
    result.changed = updated != original
    if result.changed:
        write_atomic(path, updated)
        logger.info(f"Updated {path} for feature {feature_name}")
    else:
        logger.info(f"{path} already registers {feature_name}, nothing to do")
    return result
