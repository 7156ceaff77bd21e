"""
Public API for field-validation-lib

This is the "front door" - the Validator class wraps one data record and
everything needed to check it.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config_loader import ConfigLoader
from .field_paths import fill_defaults
from .messages import MessageResolver
from .rule_executor import RuleExecutor
from .rule_parser import RuleDeclaration
from .sanitizer import sanitize

logger = logging.getLogger(__name__)


class Validator:
    """
    Declarative field validator for a single data record.

    Rules are declared per field path as pipe-delimited expressions and run
    in declaration order. Failures are collected as messages, never raised.

    Example:
        from field_validation import Validator

        validator = Validator({"name": " Ada ", "address": {"zip": "12345"}})
        validator.set_defaults({"role": "member"})
        validator.set_rules({
            "name": "required|string|min:2",
            "address.zip": "required|integer",
            "role": "in:member,admin",
        })
        validator.set_messages({"name.required": "Please tell us your name."})

        if not validator.validate():
            for field, messages in validator.errors().items():
                print(field, messages)

        clean = validator.sanitized()

    Note:
        validate() does not reset earlier results. Calling it twice on a
        failing record appends the same messages a second time.
    """

    def __init__(self, data: Mapping[str, Any]):
        """
        Args:
            data: Record to validate. The validator keeps a shallow copy, so
                default filling never mutates the caller's dict.
        """
        self._data: Dict[str, Any] = dict(data)
        self._errors: Dict[str, List[str]] = {}
        self._rules: Dict[str, RuleDeclaration] = {}
        self._messages: Dict[str, str] = {}
        self._custom_rules: Dict[str, Callable[[Any, Any], Any]] = {}
        self._defaults: Dict[str, Any] = {}

    @classmethod
    def from_config(
        cls,
        data: Mapping[str, Any],
        source: str,
        config_loader: Optional[ConfigLoader] = None,
    ) -> "Validator":
        """
        Build a validator from a rule-set file.

        Defaults are applied first, then rules and messages are set.

        Args:
            data: Record to validate
            source: Path or URI of a YAML/JSON rule set (see ConfigLoader)
            config_loader: Loader to use; a fresh ConfigLoader by default

        Returns:
            Configured Validator (not yet validated)

        Raises:
            ValueError: If the rule set is missing or malformed
            RuntimeError: If a remote rule set cannot be fetched

        Example:
            validator = Validator.from_config(form, "rules/signup.yaml")
            ok = validator.validate()
        """
        ruleset = (config_loader or ConfigLoader()).load(source)
        validator = cls(data)
        validator.set_defaults(ruleset["defaults"])
        validator.set_rules(ruleset["rules"])
        validator.set_messages(ruleset["messages"])
        return validator

    @property
    def data(self) -> Dict[str, Any]:
        """Copy of the current working record, including any filled defaults."""
        return dict(self._data)

    def set_rules(self, rules: Mapping[str, RuleDeclaration]) -> None:
        """Replace the rule declarations (field path -> "rule|rule:param")."""
        self._rules = dict(rules)

    def set_messages(self, messages: Mapping[str, str]) -> None:
        """Replace the message overrides ("<field>.<rule>" -> message)."""
        self._messages = dict(messages)

    def add_custom_rule(self, name: str, predicate: Callable[[Any, Any], Any]) -> None:
        """
        Register a custom rule, shadowing any built-in of the same name.

        Args:
            name: Rule name used in declarations
            predicate: Called as predicate(value, param) where param is the
                raw parameter string (not comma-split) or None. A falsy
                return records a failure.

        Raises:
            TypeError: If predicate is not callable
        """
        if not callable(predicate):
            raise TypeError(f"Custom rule '{name}' must be callable")
        self._custom_rules[name] = predicate

    def set_defaults(self, defaults: Mapping[str, Any]) -> None:
        """
        Replace the defaults and fill them into the working record now.

        Only keys absent from the top level of the record are filled;
        existing keys, including ones filled earlier, are kept.
        """
        self._defaults = dict(defaults)
        fill_defaults(self._data, self._defaults)

    def validate(self) -> bool:
        """
        Run every declared rule against the working record.

        Returns:
            True if no field has any recorded error
        """
        executor = RuleExecutor(
            self._data,
            self._custom_rules,
            MessageResolver(self._messages),
            self._errors,
        )
        executor.execute(self._rules)

        logger.debug(
            f"Validated {len(self._rules)} fields, {len(self._errors)} with errors"
        )
        return not self._errors

    def errors(self) -> Dict[str, List[str]]:
        """Return recorded errors: field path -> messages in rule order."""
        return {field: list(messages) for field, messages in self._errors.items()}

    def sanitized(self) -> Dict[str, Any]:
        """Return a copy of the working record with top-level strings trimmed and HTML-escaped."""
        return sanitize(self._data)
