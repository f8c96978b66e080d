"""Project layout and infrastructure names.

Provides the StoregenConfig dataclass describing where the application's
configuration module and feature packages live, and which state library
functions register a feature. load_config() applies environment overrides.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class StoregenConfig:
    """Layout of the target application.

    Frozen dataclass for immutable configuration. Default values describe:

        src/app/app_config.py                       configuration module
        src/app/core/store/<name>/<name>_*.py       feature packages
        src/app/shared/models/<name>.py             feature models
    """

    source_dir: str = "src"
    app_package: str = "app"
    config_module: str = "app_config"
    store_package: str = "core.store"
    models_package: str = "shared.models"
    state_module: str = "statekit.store"
    effects_module: str = "statekit.effects"
    state_callee: str = "provideState"
    effects_callee: str = "provideEffects"
    providers_name: str = "providers"

    def package_dir(self, root: Path) -> Path:
        return Path(root) / self.source_dir / Path(*self.app_package.split("."))

    def config_path(self, root: Path) -> Path:
        """Path of the configuration module under the project root."""
        return self.package_dir(root) / f"{self.config_module}.py"

    def feature_dir(self, root: Path, name: str) -> Path:
        return self.package_dir(root) / Path(*self.store_package.split(".")) / name

    def models_dir(self, root: Path) -> Path:
        return self.package_dir(root) / Path(*self.models_package.split("."))

    def feature_package(self, name: str) -> str:
        return f"{self.app_package}.{self.store_package}.{name}"

    def feature_module(self, name: str) -> str:
        """Dotted path of the module defining ``<name>Feature``."""
        return f"{self.feature_package(name)}.{name}_feature"

    def effects_module_path(self, name: str) -> str:
        """Dotted path of the module holding the feature's effects."""
        return f"{self.feature_package(name)}.{name}_effects"

    def actions_module(self, name: str) -> str:
        return f"{self.feature_package(name)}.{name}_actions"

    def model_module(self, name: str) -> str:
        return f"{self.app_package}.{self.models_package}.{name}"


DEFAULT_CONFIG = StoregenConfig()

_ENV_OVERRIDES = {
    "STOREGEN_SOURCE_DIR": "source_dir",
    "STOREGEN_APP_PACKAGE": "app_package",
    "STOREGEN_STATE_MODULE": "state_module",
    "STOREGEN_EFFECTS_MODULE": "effects_module",
}


def load_config(**overrides: str | None) -> StoregenConfig:
    """Resolve configuration from explicit values, env vars, or defaults.

    Priority: explicit (non-None) keyword > STOREGEN_* env var > default.

    Args:
        **overrides: StoregenConfig field values, typically CLI flags

    Returns:
        StoregenConfig with overrides applied
    """
    changes: dict[str, str] = {}
    for env_var, field in _ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            changes[field] = value
    changes.update({k: v for k, v in overrides.items() if v is not None})
    return replace(DEFAULT_CONFIG, **changes)
