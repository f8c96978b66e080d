"""Pydantic result models returned by the engine and the generator.

- AugmentResult: what augment() did to the configuration module
- ScaffoldResult: which files scaffold() wrote
"""

from pydantic import BaseModel


class AugmentResult(BaseModel):
    """Outcome of registering a feature in the configuration module.

    Attributes:
        feature_name: Canonical feature name
        config_path: Path of the configuration module
        imports_added: Import lines added or converted, as source text
        providers_created: True if a fresh providers list was appended
        state_registered: True if a state registration entry was added
        effects_registered: True if the effects group was registered
        changed: True if the file content changed
    """

    feature_name: str
    config_path: str
    imports_added: list[str] = []
    providers_created: bool = False
    state_registered: bool = False
    effects_registered: bool = False
    changed: bool = False


class ScaffoldResult(BaseModel):
    """Files written for a new feature.

    Attributes:
        feature_name: Canonical feature name
        files: Paths written, in write order
    """

    feature_name: str
    files: list[str]
