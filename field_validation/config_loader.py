"""Rule-set configuration loading from local files or URIs."""

import logging
import os
import urllib.parse
from typing import Any, Dict

import jsonschema
import requests
import yaml

logger = logging.getLogger(__name__)

# Shape of a rule-set document. Every section is optional.
RULESET_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "rules": {
            "type": "object",
            "additionalProperties": {
                "anyOf": [
                    {"type": "string"},
                    {"type": "array", "items": {"type": "string"}},
                ]
            },
        },
        "messages": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "defaults": {"type": "object"},
    },
    "additionalProperties": False,
}


class ConfigLoader:
    """Loads rule sets (rules, messages, defaults) from YAML or JSON sources."""

    FETCH_TIMEOUT = 10

    def load(self, source: str) -> Dict[str, Any]:
        """
        Load and check a rule set.

        Supports:
        - Plain paths - rules/signup.yaml
        - file:// - Local filesystem (absolute paths)
        - https:// / http:// - Remote HTTP(S)

        Args:
            source: Path or URI of the rule-set document

        Returns:
            Dict with "rules", "messages" and "defaults" keys (empty dicts
            for sections the document omits)

        Raises:
            ValueError: If the scheme is unsupported, the document is not
                valid YAML/JSON, or it does not match RULESET_SCHEMA
            RuntimeError: If a remote document cannot be fetched
        """
        content = self._read_source(source)

        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse rule set {source}: {e}") from e

        if document is None:
            document = {}

        try:
            jsonschema.validate(instance=document, schema=RULESET_SCHEMA)
        except jsonschema.ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ValueError(
                f"Invalid rule set {source} at {error_path}: {e.message}"
            ) from e

        ruleset = {
            "rules": document.get("rules", {}),
            "messages": document.get("messages", {}),
            "defaults": document.get("defaults", {}),
        }
        logger.info(
            f"Loaded rule set from {source} ({len(ruleset['rules'])} fields)"
        )
        return ruleset

    def _read_source(self, source: str) -> str:
        parsed = urllib.parse.urlparse(source)

        # Windows drive letters parse as one-letter schemes
        if not parsed.scheme or len(parsed.scheme) == 1:
            return self._read_file(source)

        if parsed.scheme == "file":
            return self._read_file(urllib.parse.unquote(parsed.path))

        if parsed.scheme in ("http", "https"):
            return self._fetch_uri(source)

        raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {source}")

    def _read_file(self, path: str) -> str:
        if not os.path.isfile(path):
            raise ValueError(f"Rule set file not found: {path}")
        with open(path, encoding="utf-8") as f:
            return f.read()

    def _fetch_uri(self, uri: str) -> str:
        """Fetch content from HTTP/HTTPS URI."""
        try:
            response = requests.get(uri, timeout=self.FETCH_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RuntimeError(f"Failed to fetch rule set from {uri}: {e}") from e
        return response.text
