"""storegen: scaffold state-management features and register them.

This package provides:
- Feature name normalization (naming)
- Boilerplate module generation (scaffold, templates)
- LibCST-based registration in the app configuration module (cst)
- A typer CLI (cli)
"""

from storegen.config import StoregenConfig, load_config
from storegen.cst import augment, augment_module
from storegen.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    EmptyNameError,
    FeatureExistsError,
    InvalidNameError,
    ProvidersShapeError,
    StoregenError,
)
from storegen.models import AugmentResult, ScaffoldResult
from storegen.naming import capitalize, normalize
from storegen.scaffold import scaffold

__all__ = [
    # Naming
    "capitalize",
    "normalize",
    # Engine
    "AugmentResult",
    "augment",
    "augment_module",
    # Generator
    "ScaffoldResult",
    "scaffold",
    # Configuration
    "StoregenConfig",
    "load_config",
    # Errors
    "ConfigNotFoundError",
    "ConfigParseError",
    "EmptyNameError",
    "FeatureExistsError",
    "InvalidNameError",
    "ProvidersShapeError",
    "StoregenError",
]
__version__ = "0.1.0"

