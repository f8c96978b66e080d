"""LibCST-based editing of the application configuration module.

Provides:
- core: parse_file, parse_source, append_item
- imports: ensure_named_import, ensure_namespace_import
- providers: find_providers, merge_state_registration, merge_effects_registration
- engine: augment, augment_module
"""

from storegen.cst.engine import augment, augment_module

__all__ = ["augment", "augment_module"]
