"""rulematch - Wildcard pattern matching and specificity ordering."""

from __future__ import annotations

# Core
from rulematch.utils.pattern import (
    DEFAULT_SYNTAX,
    Specificity,
    WildcardSyntax,
    clear_cache,
    compare_specificity,
    compile_pattern,
    equals,
    includes,
    is_more_general,
    is_more_specific,
    literal_skeleton,
    matches,
    normalize,
)

# Resolver
from rulematch.resolver import PrecedenceResolver, PrecedenceRule

# Config
from rulematch.config import Config

# Errors
from rulematch.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    FileOperationError,
    PatternCompileError,
    RuleMatchError,
    RuleSetError,
    SerializationError,
)

# Serialization and hashing
from rulematch.serialization import CanonicalStringifier, stringify
from rulematch.hashing import compute_object_sha256, compute_sha256, compute_string_sha256

# Files
from rulematch.files import (
    ScanResult,
    read_ignore_file,
    read_toml_file,
    scan_and_filter_files,
    should_ignore,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "DEFAULT_SYNTAX",
    "Specificity",
    "WildcardSyntax",
    "clear_cache",
    "compare_specificity",
    "compile_pattern",
    "equals",
    "includes",
    "is_more_general",
    "is_more_specific",
    "literal_skeleton",
    "matches",
    "normalize",
    # Resolver
    "PrecedenceResolver",
    "PrecedenceRule",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "RuleMatchError",
    "ConfigError",
    "ConfigNotFoundError",
    "RuleSetError",
    "PatternCompileError",
    "SerializationError",
    "FileOperationError",
    # Serialization and hashing
    "CanonicalStringifier",
    "stringify",
    "compute_sha256",
    "compute_string_sha256",
    "compute_object_sha256",
    # Files
    "ScanResult",
    "read_ignore_file",
    "read_toml_file",
    "scan_and_filter_files",
    "should_ignore",
]
