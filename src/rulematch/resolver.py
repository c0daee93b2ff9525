"""Precedence resolution over overlapping wildcard rules.

This module defines the PrecedenceRule dataclass and the PrecedenceResolver
class, which selects the single most specific rule among all rules whose
pattern matches a value.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass

import yaml

from rulematch.errors import ConfigError, ConfigNotFoundError, RuleSetError
from rulematch.utils.pattern import DEFAULT_SYNTAX, WildcardSyntax

__all__ = ["PrecedenceRule", "PrecedenceResolver"]

_EFFECTS = ("allow", "deny")


@dataclass
class PrecedenceRule:
    """A single wildcard rule.

    The rule applies to every value its pattern matches. When several rules
    apply, the most specific pattern decides the effect.
    """

    pattern: str
    effect: str
    description: str = ""


class PrecedenceResolver:
    """Resolve overlapping wildcard rules with most-specific-wins evaluation.

    Among the matching rules, a rule is replaced as the winner whenever it is
    more general than (includes) a later candidate. Equal or unrelated
    candidates keep the earlier rule, so listing order breaks ties.

    Thread safety:
        Internally synchronized. All public methods (check, resolve,
        add_rule, remove_rule, reload) are safe to call concurrently.
    """

    def __init__(
        self,
        rules: list[PrecedenceRule],
        default_effect: str = "deny",
        syntax: WildcardSyntax = DEFAULT_SYNTAX,
    ) -> None:
        """Initialize the resolver.

        Args:
            rules: Rules in listing order (earlier wins ties).
            default_effect: Effect when no rule matches ('allow' or 'deny').
            syntax: Wildcard convention used by the rule patterns.
        """
        if default_effect not in _EFFECTS:
            raise RuleSetError(
                f"Invalid default_effect '{default_effect}', must be 'allow' or 'deny'"
            )
        self._rules: list[PrecedenceRule] = list(rules)
        self._default_effect: str = default_effect
        self._syntax = syntax
        self._yaml_path: str | None = None
        self._logger: logging.Logger = logging.getLogger("rulematch.resolver")
        self._lock = threading.Lock()

    @property
    def rules(self) -> list[PrecedenceRule]:
        """A snapshot of the current rules."""
        with self._lock:
            return list(self._rules)

    @property
    def syntax(self) -> WildcardSyntax:
        with self._lock:
            return self._syntax

    @classmethod
    def load(cls, yaml_path: str) -> PrecedenceResolver:
        """Load a rule set from a YAML file.

        Args:
            yaml_path: Path to the YAML rule set.

        Returns:
            A new PrecedenceResolver configured from the file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            RuleSetError: If the YAML is invalid or has structural errors.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise RuleSetError(f"Invalid YAML in {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise RuleSetError(
                f"Rule set must be a mapping, got {type(data).__name__}"
            )

        if "rules" not in data:
            raise RuleSetError("Rule set missing required 'rules' key")

        raw_rules = data["rules"]
        if not isinstance(raw_rules, list):
            raise RuleSetError(
                f"'rules' must be a list, got {type(raw_rules).__name__}"
            )

        wildcard = data.get("wildcard") or {}
        if not isinstance(wildcard, dict):
            raise RuleSetError(
                f"'wildcard' must be a mapping, got {type(wildcard).__name__}"
            )
        try:
            syntax = WildcardSyntax(token=wildcard.get("token", "*"))
        except ConfigError as e:
            raise RuleSetError(e.message) from e

        rules: list[PrecedenceRule] = []
        for i, raw_rule in enumerate(raw_rules):
            if not isinstance(raw_rule, dict):
                raise RuleSetError(
                    f"Rule {i} must be a mapping, got {type(raw_rule).__name__}"
                )

            for key in ("pattern", "effect"):
                if key not in raw_rule:
                    raise RuleSetError(f"Rule {i} missing required key '{key}'")

            pattern = raw_rule["pattern"]
            if not isinstance(pattern, str):
                raise RuleSetError(
                    f"Rule {i} 'pattern' must be a string, got {type(pattern).__name__}"
                )

            effect = raw_rule["effect"]
            if effect not in _EFFECTS:
                raise RuleSetError(
                    f"Rule {i} has invalid effect '{effect}', must be 'allow' or 'deny'"
                )

            rules.append(
                PrecedenceRule(
                    pattern=pattern,
                    effect=effect,
                    description=raw_rule.get("description", ""),
                )
            )

        resolver = cls(
            rules=rules,
            default_effect=data.get("default_effect", "deny"),
            syntax=syntax,
        )
        resolver._yaml_path = yaml_path
        return resolver

    def candidates(self, value: str) -> list[PrecedenceRule]:
        """Return every rule whose pattern matches ``value``, in listing order."""
        with self._lock:
            rules = list(self._rules)
            syntax = self._syntax
        return [r for r in rules if syntax.matches(r.pattern, value)]

    def resolve(self, value: str) -> PrecedenceRule | None:
        """Return the most specific rule matching ``value``, or None."""
        with self._lock:
            rules = list(self._rules)
            syntax = self._syntax

        winner: PrecedenceRule | None = None
        for rule in rules:
            if not syntax.matches(rule.pattern, value):
                continue
            if winner is None or syntax.includes(winner.pattern, rule.pattern):
                winner = rule
        return winner

    def check(self, value: str) -> bool:
        """Check if ``value`` is allowed.

        Returns:
            True if the winning rule allows, or if nothing matches and the
            default effect is 'allow'.
        """
        rule = self.resolve(value)
        if rule is not None:
            decision = rule.effect == "allow"
            self._logger.debug(
                "Resolver check: value=%s decision=%s pattern=%s rule=%s",
                value,
                rule.effect,
                rule.pattern,
                rule.description or "(no description)",
            )
            return decision

        with self._lock:
            default_effect = self._default_effect
        self._logger.debug(
            "Resolver check: value=%s decision=%s rule=default",
            value,
            default_effect,
        )
        return default_effect == "allow"

    def add_rule(self, rule: PrecedenceRule) -> None:
        """Append a rule (it loses ties against existing rules).

        Raises:
            RuleSetError: If the rule effect is not 'allow' or 'deny'.
        """
        if rule.effect not in _EFFECTS:
            raise RuleSetError(
                f"Invalid effect '{rule.effect}', must be 'allow' or 'deny'"
            )
        with self._lock:
            self._rules.append(rule)

    def remove_rule(self, pattern: str) -> bool:
        """Remove the first rule whose pattern equals ``pattern`` after normalization.

        Returns:
            True if a rule was found and removed, False otherwise.
        """
        with self._lock:
            for i, rule in enumerate(self._rules):
                if self._syntax.equals(rule.pattern, pattern):
                    self._rules.pop(i)
                    return True
            return False

    def reload(self) -> None:
        """Re-read the rule set from the original YAML file.

        Only works if the resolver was created via PrecedenceResolver.load().
        Raises RuleSetError if no YAML path was stored.
        """
        with self._lock:
            yaml_path = self._yaml_path
        if yaml_path is None:
            raise RuleSetError("Cannot reload: resolver was not loaded from a YAML file")
        reloaded = PrecedenceResolver.load(yaml_path)
        with self._lock:
            self._rules = reloaded._rules
            self._default_effect = reloaded._default_effect
            self._syntax = reloaded._syntax
