"""
field-validation-lib: Declarative field validation for nested data records

This library provides a small rule engine with:
- Pipe-delimited rule declarations per field ("required|string|min:3")
- Fifteen built-in rules plus caller-registered custom rules
- Dot-path addressing of nested fields ("address.zip")
- Per (field, rule) message overrides
- Default values for missing top-level keys
- HTML-safe sanitized output
- Rule sets loaded from YAML/JSON files or URIs

Example:
    from field_validation import Validator

    validator = Validator({"email": "ada@example.com"})
    validator.set_rules({"email": "required|email"})
    ok = validator.validate()
"""

from .api import Validator
from .config_loader import ConfigLoader
from .field_paths import MISSING

__version__ = "0.1.0"
__all__ = ["Validator", "ConfigLoader", "MISSING"]
