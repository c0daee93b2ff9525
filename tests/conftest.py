"""Shared test fixtures for the rulematch test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from rulematch.utils.pattern import clear_cache


@pytest.fixture(autouse=True)
def _fresh_pattern_cache() -> None:
    """Every test starts with an empty compiled-pattern cache."""
    clear_cache()


@pytest.fixture
def rules_yaml(tmp_path: Path) -> str:
    """Write a sample rule set YAML file and return its path."""
    content = """
default_effect: deny
rules:
  - pattern: "*"
    effect: deny
    description: "deny by default"
  - pattern: "docs/*"
    effect: allow
  - pattern: "docs/secret*"
    effect: deny
"""
    yaml_file = tmp_path / "rules.yaml"
    yaml_file.write_text(content)
    return str(yaml_file)


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """A small directory tree for scan tests.

    a.py, b.txt, build/out.py, src/c.py, src/d.PY
    """
    (tmp_path / "a.py").write_text("")
    (tmp_path / "b.txt").write_text("")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.py").write_text("")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "c.py").write_text("")
    (tmp_path / "src" / "d.PY").write_text("")
    return tmp_path
