"""Architecture rules: layer table, naming conventions, graph consistency."""

from rules.config import (
    ArchGraphConfig,
    ConfigError,
    LayersConfig,
    NamingConfig,
    load_config,
)
from rules.consistency import check_graph_consistency
from rules.layers import build_allowed_deps, check_layer_violations, is_violation
from rules.naming import validate_node

__all__ = [
    "ArchGraphConfig",
    "ConfigError",
    "LayersConfig",
    "NamingConfig",
    "build_allowed_deps",
    "check_graph_consistency",
    "check_layer_violations",
    "is_violation",
    "load_config",
    "validate_node",
]
