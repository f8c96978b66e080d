"""Write the boilerplate modules of a new feature.

Creates, for feature "orders" with the default layout:

    src/app/shared/models/orders.py
    src/app/core/store/orders/__init__.py
    src/app/core/store/orders/orders_actions.py
    src/app/core/store/orders/orders_effects.py
    src/app/core/store/orders/orders_feature.py
"""

import logging
from pathlib import Path

from storegen.config import DEFAULT_CONFIG, StoregenConfig
from storegen.errors import FeatureExistsError
from storegen.models import ScaffoldResult
from storegen.naming import capitalize
from storegen.templates import render_actions, render_effects, render_feature, render_model

logger = logging.getLogger(__name__)


def feature_files(
    name: str, project_root: Path, config: StoregenConfig = DEFAULT_CONFIG
) -> dict[Path, str]:
    """Map each file of the feature to its content, in write order."""
    feature_dir = config.feature_dir(project_root, name)
    return {
        config.models_dir(project_root) / f"{name}.py": render_model(name, config),
        feature_dir / "__init__.py": f'"""{capitalize(name)} feature store."""\n',
        feature_dir / f"{name}_actions.py": render_actions(name, config),
        feature_dir / f"{name}_effects.py": render_effects(name, config),
        feature_dir / f"{name}_feature.py": render_feature(name, config),
    }


def scaffold(
    feature_name: str,
    project_root: Path,
    config: StoregenConfig | None = None,
    overwrite: bool = False,
) -> ScaffoldResult:
    """Generate the feature's modules under the project root.

    Nothing is written if any target exists and ``overwrite`` is False.

    Args:
        feature_name: Canonical feature name
        project_root: Root of the application project
        config: Layout; defaults to StoregenConfig()
        overwrite: Replace existing files

    Returns:
        ScaffoldResult listing the written files

    Raises:
        FeatureExistsError: If a target file exists and overwrite is False
    """
    config = config or DEFAULT_CONFIG
    files = feature_files(feature_name, Path(project_root), config)

    if not overwrite:
        for path in files:
            if path.exists():
                raise FeatureExistsError(path)

    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {path}")

    logger.info(f"Scaffolded feature {feature_name} ({len(files)} files)")
    return ScaffoldResult(feature_name=feature_name, files=[str(p) for p in files])
