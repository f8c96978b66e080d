"""Tests for StoregenConfig and load_config()."""

from pathlib import Path

from storegen.config import DEFAULT_CONFIG, StoregenConfig, load_config


def test_default_paths():
    """Default layout matches src/app/app_config.py."""
    root = Path("/project")
    assert DEFAULT_CONFIG.config_path(root) == Path("/project/src/app/app_config.py")
    assert DEFAULT_CONFIG.feature_dir(root, "orders") == Path("/project/src/app/core/store/orders")
    assert DEFAULT_CONFIG.models_dir(root) == Path("/project/src/app/shared/models")


def test_module_paths():
    """Import paths are derived from the feature name."""
    assert DEFAULT_CONFIG.feature_module("orders") == "app.core.store.orders.orders_feature"
    assert DEFAULT_CONFIG.effects_module_path("orders") == "app.core.store.orders.orders_effects"
    assert DEFAULT_CONFIG.actions_module("orders") == "app.core.store.orders.orders_actions"
    assert DEFAULT_CONFIG.model_module("orders") == "app.shared.models.orders"


def test_dotted_app_package():
    """A dotted app package maps onto nested directories."""
    config = StoregenConfig(app_package="acme.web")
    assert config.config_path(Path("/p")) == Path("/p/src/acme/web/app_config.py")


def test_load_config_defaults(monkeypatch):
    """Without env vars or overrides, defaults are used."""
    for var in ("STOREGEN_SOURCE_DIR", "STOREGEN_APP_PACKAGE", "STOREGEN_STATE_MODULE", "STOREGEN_EFFECTS_MODULE"):
        monkeypatch.delenv(var, raising=False)
    assert load_config() == DEFAULT_CONFIG


def test_load_config_env(monkeypatch):
    """STOREGEN_* env vars override defaults."""
    monkeypatch.setenv("STOREGEN_APP_PACKAGE", "shop")
    monkeypatch.setenv("STOREGEN_STATE_MODULE", "ministore.state")
    config = load_config()
    assert config.app_package == "shop"
    assert config.state_module == "ministore.state"
    assert config.effects_module == "statekit.effects"


def test_load_config_override_beats_env(monkeypatch):
    """Explicit values take priority over env vars; None is ignored."""
    monkeypatch.setenv("STOREGEN_APP_PACKAGE", "shop")
    assert load_config(app_package="web").app_package == "web"
    assert load_config(app_package=None).app_package == "shop"
