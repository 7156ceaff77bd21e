"""Built-in rule set."""

from .base import BuiltinRule
from .builtin import BUILTIN_RULES, get_builtin_rule

__all__ = ["BuiltinRule", "BUILTIN_RULES", "get_builtin_rule"]
