"""Utils module - Configuration and path helpers."""

from roadrouter_core.utils.config import (
    ConfigSource,
    RouterConfig,
    configure_logging,
    load_config,
)
from roadrouter_core.utils.helpers import (
    ALL_METHODS,
    derive_base_path,
    join_pattern,
    normalize_path,
    split_methods,
)

__all__ = [
    "ALL_METHODS",
    "ConfigSource",
    "RouterConfig",
    "configure_logging",
    "derive_base_path",
    "join_pattern",
    "load_config",
    "normalize_path",
    "split_methods",
]
