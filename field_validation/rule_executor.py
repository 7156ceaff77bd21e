import logging
from typing import Any, Callable, Dict, List, Mapping

from .field_paths import resolve_path
from .messages import MessageResolver, custom_rule_failed, invalid_rule
from .rule_parser import RuleDeclaration, RuleExpression, parse_rules
from .rules import get_builtin_rule

logger = logging.getLogger(__name__)

CustomRule = Callable[[Any, Any], Any]


class RuleExecutor:
    """Applies parsed rule expressions to fields and records failures"""

    def __init__(
        self,
        data: Mapping[str, Any],
        custom_rules: Mapping[str, CustomRule],
        messages: MessageResolver,
        errors: Dict[str, List[str]],
    ):
        """
        Initialize rule executor.

        Args:
            data: Working record the field paths are resolved against
            custom_rules: Caller-registered predicates, checked before built-ins
            messages: Resolver for override/fallback message text
            errors: Error mapping to append failures to (shared with the caller)
        """
        self.data = data
        self.custom_rules = custom_rules
        self.messages = messages
        self.errors = errors

    def execute(self, rules: Mapping[str, RuleDeclaration]) -> None:
        """
        Run every field's declaration in declaration order.

        Args:
            rules: Mapping of field path to rule declaration
        """
        for field, declaration in rules.items():
            self.execute_field(field, declaration)

    def execute_field(self, field: str, declaration: RuleDeclaration) -> None:
        """Resolve one field and apply each of its rules, left to right."""
        value = resolve_path(field, self.data)
        for expression in parse_rules(declaration):
            self._apply_rule(field, expression, value)

    def _apply_rule(self, field: str, expression: RuleExpression, value: Any) -> None:
        """Apply a single expression: custom rule, else built-in, else invalid."""
        name, param = expression
        logger.debug(f"Applying rule '{name}' to field '{field}'")

        # Custom rules shadow built-ins of the same name
        if name in self.custom_rules:
            if not self.custom_rules[name](value, param):
                self._add_error(field, name, custom_rule_failed(field))
            return

        rule = get_builtin_rule(name)
        if rule is None:
            logger.warning(f"Unknown rule '{name}' declared for field '{field}'")
            self._add_error(field, name, invalid_rule(name))
            return

        if not rule.passes(value, param, self.data):
            self._add_error(field, name, rule.default_message(field, value, param))

    def _add_error(self, field: str, rule: str, fallback: str) -> None:
        message = self.messages.resolve(field, rule, fallback)
        self.errors.setdefault(field, []).append(message)
