"""
Abstract base class for built-in validation rules.

Every built-in rule subclasses BuiltinRule, sets a unique ``name`` and a
``message`` template, and implements ``passes()``. The rule executor looks
rules up by name in the BUILTIN_RULES registry, so a subclass only needs to
be listed there to become available in rule declarations.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class BuiltinRule(ABC):
    """
    Abstract base class for all built-in rules.

    Rules are stateless: the same instance is shared by every Validator.
    The ``message`` template may use the ``{field}`` and ``{param}``
    placeholders; the raw parameter string is interpolated as given.
    """

    name: str = ""
    message: str = "{field} is invalid."

    @abstractmethod
    def passes(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        """
        Check a resolved field value.

        Args:
            value: Resolved field value (None if the path was missing)
            param: Raw parameter string, or None when the expression had none
            data: The whole working record, for rules that compare fields

        Returns:
            True if the value satisfies the rule
        """

    def default_message(self, field: str, value: Any, param: Optional[str]) -> str:
        """Fallback message used when no override exists for (field, rule)."""
        return self.message.format(field=field, param="" if param is None else param)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.name}'>"
