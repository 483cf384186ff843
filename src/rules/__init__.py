"""Rule definitions for codemap-core: language registry and configuration."""

from rules.config import (
    CONFIG_FILENAME,
    CodeMapConfig,
    ConfigError,
    load_config,
    resolve_output_dir,
)
from rules.languages import (
    PATTERN_LANGUAGES,
    TREE_LANGUAGES,
    PatternLanguage,
    TreeLanguage,
    is_supported_path,
    language_for_path,
    lookup_language,
    supported_extensions,
)

__all__ = [
    "CONFIG_FILENAME",
    "PATTERN_LANGUAGES",
    "TREE_LANGUAGES",
    "CodeMapConfig",
    "ConfigError",
    "PatternLanguage",
    "TreeLanguage",
    "is_supported_path",
    "language_for_path",
    "load_config",
    "lookup_language",
    "resolve_output_dir",
    "supported_extensions",
]
