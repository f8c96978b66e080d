"""Tests for CLI module.

Tests are organized into groups:
1. Pure function tests (resolve_root, setup_logging), no Typer
2. Typer CLI tests (--version, new, register), using CliRunner
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from typer.testing import CliRunner

from storegen.cli import app, resolve_root, setup_logging
from storegen.config import DEFAULT_CONFIG

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_package_logger():
    """Remove all handlers from the storegen logger after test.

    setup_logging() modifies global state (the "storegen" logger). This
    fixture ensures tests don't leak handlers or propagation settings.
    """
    yield
    package_logger = logging.getLogger("storegen")
    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def log_args(tmp_path) -> list[str]:
    return ["--log-dir", str(tmp_path / "logs")]


# === Pure function tests: resolve_root() ===


def test_resolve_root_flag_takes_priority(monkeypatch, tmp_path):
    """--root overrides STOREGEN_ROOT env var."""
    monkeypatch.setenv("STOREGEN_ROOT", "/elsewhere")
    assert resolve_root(tmp_path) == tmp_path


def test_resolve_root_env_var_fallback(monkeypatch):
    """STOREGEN_ROOT used when no flag provided."""
    monkeypatch.setenv("STOREGEN_ROOT", "/elsewhere")
    assert resolve_root(None) == Path("/elsewhere")


def test_resolve_root_default(monkeypatch):
    """Defaults to the current directory."""
    monkeypatch.delenv("STOREGEN_ROOT", raising=False)
    assert resolve_root(None) == Path(".")


# === Pure function tests: setup_logging() ===


def test_setup_logging_creates_directory(tmp_path):
    """setup_logging() creates log directory if missing."""
    log_dir = tmp_path / "logs"
    setup_logging(log_dir, "info")
    assert (log_dir / "storegen.log").exists()


def test_setup_logging_handlers(tmp_path):
    """The storegen logger gets a rotating file handler and a warning stderr handler."""
    setup_logging(tmp_path / "logs", "debug")
    package_logger = logging.getLogger("storegen")
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is False
    assert any(isinstance(h, RotatingFileHandler) for h in package_logger.handlers)
    stream = [h for h in package_logger.handlers if not isinstance(h, RotatingFileHandler)]
    assert [h.level for h in stream] == [logging.WARNING]


def test_setup_logging_file_format(tmp_path):
    """File records carry level and logger name."""
    log_dir = tmp_path / "logs"
    setup_logging(log_dir, "debug")
    logging.getLogger("storegen.cst.imports").debug("Adding import")
    for handler in logging.getLogger("storegen").handlers:
        handler.flush()

    line = (log_dir / "storegen.log").read_text().splitlines()[-1]
    assert line.endswith("DEBUG   storegen.cst.imports: Adding import")


def test_setup_logging_stderr_skips_errors(tmp_path):
    """Warnings pass the stderr handler; errors are left to the commands."""
    setup_logging(tmp_path / "logs", "info")
    stream = next(
        h
        for h in logging.getLogger("storegen").handlers
        if not isinstance(h, RotatingFileHandler)
    )
    warning = logging.makeLogRecord({"levelno": logging.WARNING, "msg": "w"})
    error = logging.makeLogRecord({"levelno": logging.ERROR, "msg": "e"})
    assert stream.filter(warning)
    assert not stream.filter(error)


def test_setup_logging_no_duplicate_handlers(tmp_path):
    """Calling setup_logging() twice does not stack handlers."""
    setup_logging(tmp_path / "logs", "info")
    setup_logging(tmp_path / "logs", "info")
    assert len(logging.getLogger("storegen").handlers) == 2


# === Typer CLI tests ===


def test_cli_version():
    """--version prints the version and exits 0."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "storegen 0.1.0" in result.output


def test_cli_new(make_project, log_args):
    """new writes the feature files and registers the feature."""
    root = make_project("batched")
    result = runner.invoke(app, [*log_args, "new", "Order Items", "--root", str(root)])

    assert result.exit_code == 0, result.output
    assert "Created 5 files for orderItems" in result.output
    assert "Registered effects orderItemsEffects" in result.output
    assert (DEFAULT_CONFIG.feature_dir(root, "orderItems") / "orderItems_feature.py").exists()
    content = DEFAULT_CONFIG.config_path(root).read_text()
    assert "provideEffects([usersEffects, productsEffects, orderItemsEffects])" in content


def test_cli_new_prompts_for_name(make_project, log_args):
    """Without a NAME argument the user is prompted."""
    root = make_project("no_providers")
    result = runner.invoke(app, [*log_args, "new", "--root", str(root)], input="users\n")

    assert result.exit_code == 0, result.output
    assert "Feature name" in result.output
    assert "Created providers list" in result.output


def test_cli_new_empty_name(make_project, log_args):
    """A name without letters or digits fails before touching files."""
    root = make_project("batched")
    before = DEFAULT_CONFIG.config_path(root).read_bytes()
    result = runner.invoke(app, [*log_args, "new", "---", "--root", str(root)])

    assert result.exit_code == 1
    assert "no letters or digits" in result.output
    assert DEFAULT_CONFIG.config_path(root).read_bytes() == before
    assert not (DEFAULT_CONFIG.package_dir(root) / "core").exists()


def test_cli_new_existing_feature(make_project, log_args):
    """new refuses to overwrite a feature without --force."""
    root = make_project("batched")
    runner.invoke(app, [*log_args, "new", "orders", "--root", str(root)])
    result = runner.invoke(app, [*log_args, "new", "orders", "--root", str(root)])

    assert result.exit_code == 1
    assert "--force" in result.output

    forced = runner.invoke(app, [*log_args, "new", "orders", "--root", str(root), "--force"])
    assert forced.exit_code == 0, forced.output
    assert "orders already registered" in forced.output


def test_cli_register(make_project, log_args):
    """register only edits app_config.py."""
    root = make_project("variadic")
    result = runner.invoke(app, [*log_args, "register", "orders", "--root", str(root)])

    assert result.exit_code == 0, result.output
    assert "+ from app.core.store.orders.orders_feature import ordersFeature" in result.output
    assert not DEFAULT_CONFIG.feature_dir(root, "orders").exists()


def test_cli_register_config_not_found(make_project, log_args):
    """A missing app_config.py exits 1 with a message."""
    root = make_project(None)
    result = runner.invoke(app, [*log_args, "register", "orders", "--root", str(root)])

    assert result.exit_code == 1
    assert "Configuration module not found" in result.output
    assert result.output.count("Configuration module not found") == 1


def test_cli_register_app_package(tmp_path, log_args):
    """--app-package points the CLI at another package."""
    config_path = tmp_path / "src" / "shop" / "app_config.py"
    config_path.parent.mkdir(parents=True)
    config_path.write_text("providers = []\n")

    result = runner.invoke(
        app, [*log_args, "register", "orders", "--root", str(tmp_path), "--app-package", "shop"]
    )

    assert result.exit_code == 0, result.output
    assert "import shop.core.store.orders.orders_effects as ordersEffects" in config_path.read_text()


def test_cli_register_warns_about_aliased_import(make_project, log_args):
    """An aliased provideState import is reported on stderr, not rewritten."""
    root = make_project(None)
    config_path = DEFAULT_CONFIG.config_path(root)
    config_path.write_text("from statekit.store import provideState as ps\n\nproviders = []\n")

    result = runner.invoke(app, [*log_args, "register", "orders", "--root", str(root)])

    assert result.exit_code == 0, result.output
    assert (
        "storegen: WARNING: provideState is imported from statekit.store as ps" in result.output
    )
    assert "from statekit.store import provideState as ps\n" in config_path.read_text()
