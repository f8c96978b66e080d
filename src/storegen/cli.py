"""Typer-based CLI for storegen.

Commands:
- new: prompt for a feature name, write its modules, register it
- register: register an existing feature in the configuration module

Logging goes to ~/.storegen/logs/storegen.log, with warnings echoed on
stderr; user-facing messages and errors go through typer.echo/secho.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import typer

from storegen import __version__
from storegen.config import StoregenConfig, load_config
from storegen.cst import augment
from storegen.errors import StoregenError
from storegen.models import AugmentResult
from storegen.naming import normalize
from storegen.scaffold import scaffold

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="storegen",
    help="Scaffold state-management features and register them in app_config.py",
    add_completion=False,
)


def resolve_root(root_flag: Path | None) -> Path:
    """Resolve the project root from CLI flag, env var, or cwd.

    Priority: CLI flag > STOREGEN_ROOT env var > current directory.
    """
    if root_flag:
        return root_flag
    return Path(os.getenv("STOREGEN_ROOT", "."))


def setup_logging(log_dir: Path, log_level: str) -> None:
    """Configure the ``storegen`` logger.

    Everything at ``log_level`` and above goes to a rotating file. Warnings
    from the editing steps (an aliased import, a replaced named import) are
    also echoed on stderr, prefixed with the program name. Errors are left
    to the commands, which report them through typer.

    Args:
        log_dir: Directory for log files (created if missing)
        log_level: Logging level (info, debug, warning, error, critical)
    """
    log_dir = log_dir.expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger("storegen")
    package_logger.setLevel(log_level.upper())
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)

    file_handler = RotatingFileHandler(
        log_dir / "storegen.log",
        maxBytes=1024 * 1024,  # 1MB
        backupCount=2,
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"),
    )
    package_logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    stderr_handler.setFormatter(logging.Formatter("storegen: %(levelname)s: %(message)s"))
    package_logger.addHandler(stderr_handler)


def report_augment(result: AugmentResult) -> None:
    """Print what augment() changed."""
    if not result.changed:
        typer.echo(f"{result.config_path}: {result.feature_name} already registered")
        return

    typer.secho(f"✓ Updated {result.config_path}", fg=typer.colors.GREEN)
    for line in result.imports_added:
        typer.echo(f"  + {line}")
    if result.providers_created:
        typer.echo("  Created providers list with provideState/provideEffects")
        return
    if result.state_registered:
        typer.echo(f"  Registered state {result.feature_name}Feature")
    if result.effects_registered:
        typer.echo(f"  Registered effects {result.feature_name}Effects")


def _fail(error: StoregenError) -> None:
    logger.error(str(error))
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_dir: Path = typer.Option(
        Path("~/.storegen/logs"),
        "--log-dir",
        help="Directory for log files",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (debug, info, warning, error, critical)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print version and exit",
    ),
) -> None:
    """Scaffold state-management features for a Python application."""
    if version:
        typer.echo(f"storegen {__version__}")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(log_dir, log_level)


def _config(app_package: str | None) -> StoregenConfig:
    return load_config(app_package=app_package)


@app.command()
def new(
    name: str | None = typer.Argument(
        None,
        help="Feature name, e.g. users (prompted for when omitted)",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides STOREGEN_ROOT env var, default: cwd)",
    ),
    app_package: str | None = typer.Option(
        None,
        "--app-package",
        help="Application package under src/ (overrides STOREGEN_APP_PACKAGE)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing feature files",
    ),
) -> None:
    """Generate a feature's modules and register it in app_config.py."""
    if not name:
        name = typer.prompt("Feature name (e.g. users)")

    project_root = resolve_root(root)
    config = _config(app_package)
    try:
        feature = normalize(name)
        scaffolded = scaffold(feature, project_root, config, overwrite=force)
        typer.secho(
            f"✓ Created {len(scaffolded.files)} files for {feature}",
            fg=typer.colors.GREEN,
        )
        for path in scaffolded.files:
            typer.echo(f"  {path}")
        report_augment(augment(feature, project_root, config))
    except StoregenError as e:
        _fail(e)


@app.command()
def register(
    name: str = typer.Argument(..., help="Feature name"),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (overrides STOREGEN_ROOT env var, default: cwd)",
    ),
    app_package: str | None = typer.Option(
        None,
        "--app-package",
        help="Application package under src/ (overrides STOREGEN_APP_PACKAGE)",
    ),
) -> None:
    """Register an already generated feature in app_config.py."""
    try:
        feature = normalize(name)
        report_augment(augment(feature, resolve_root(root), _config(app_package)))
    except StoregenError as e:
        _fail(e)
