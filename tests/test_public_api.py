"""Tests for the rulematch public API surface.

Verifies that all expected names are importable from the top-level
``rulematch`` package and that ``__all__`` is comprehensive.
"""

import re

import rulematch


class TestPublicAPIImports:
    """Every public component must be importable from ``import rulematch``."""

    def test_core_functions_importable(self):
        from rulematch import compare_specificity, equals, includes, matches, normalize

        assert matches("a*", "abc") is True
        assert all(f is not None for f in (compare_specificity, equals, includes, normalize))

    def test_resolver_importable(self):
        from rulematch import PrecedenceResolver, PrecedenceRule

        assert PrecedenceResolver is not None
        assert PrecedenceRule is not None

    def test_specificity_importable(self):
        from rulematch import Specificity

        assert Specificity.A_INCLUDES_B.value == "a_includes_b"

    def test_version_is_set(self):
        assert hasattr(rulematch, "__version__")
        assert isinstance(rulematch.__version__, str)
        assert re.match(r"^\d+\.\d+\.\d+", rulematch.__version__)


class TestPublicAPIAll:
    """Verify __all__ is comprehensive and matches actual exports."""

    EXPECTED_NAMES = {
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
    }

    def test_all_contains_all_expected_names(self):
        actual = set(rulematch.__all__)
        missing = self.EXPECTED_NAMES - actual
        assert not missing, f"Missing from __all__: {missing}"

    def test_all_has_no_unexpected_extras(self):
        actual = set(rulematch.__all__)
        extras = actual - self.EXPECTED_NAMES
        assert not extras, f"Unexpected names in __all__: {extras}"

    def test_all_names_resolve(self):
        for name in rulematch.__all__:
            assert hasattr(rulematch, name), name
