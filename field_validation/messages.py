"""Error message lookup: exact (field, rule) override, else the rule's fallback."""

from typing import Dict, Optional


class MessageResolver:
    """Resolves the message recorded for a failed rule."""

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        """
        Args:
            overrides: Mapping of "<field>.<rule>" to literal message text
        """
        self.overrides = dict(overrides or {})

    def resolve(self, field: str, rule: str, fallback: str) -> str:
        """Return the override for "<field>.<rule>", or fallback if none exists."""
        return self.overrides.get(f"{field}.{rule}", fallback)


def custom_rule_failed(field: str) -> str:
    return f"{field} validation failed."


def invalid_rule(rule: str) -> str:
    return f"Invalid rule: {rule}."
