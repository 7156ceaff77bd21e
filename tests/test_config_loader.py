"""
Tests for rule-set loading

Covers local YAML/JSON files, file:// URIs, remote URIs (with requests
stubbed out) and Validator.from_config().
"""
import json
import pytest
import requests
from field_validation import ConfigLoader, Validator


SIGNUP_YAML = """
rules:
  name: required|string|min:2
  email: required|email
  role:
    - required
    - in:member,admin
messages:
  name.required: Please tell us your name.
defaults:
  role: member
"""


@pytest.fixture
def loader():
    """Create a ConfigLoader instance for testing."""
    return ConfigLoader()


@pytest.fixture
def signup_file(tmp_path):
    """Write the signup rule set to a temporary YAML file."""
    path = tmp_path / "signup.yaml"
    path.write_text(SIGNUP_YAML)
    return path


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class TestLocalFiles:
    """Test loading from the local filesystem."""

    def test_load_yaml(self, loader, signup_file):
        """Test that all three sections are loaded."""
        ruleset = loader.load(str(signup_file))

        assert ruleset["rules"]["name"] == "required|string|min:2"
        assert ruleset["rules"]["role"] == ["required", "in:member,admin"]
        assert ruleset["messages"] == {"name.required": "Please tell us your name."}
        assert ruleset["defaults"] == {"role": "member"}

    def test_rule_order_preserved(self, loader, signup_file):
        """Test that fields keep their document order."""
        ruleset = loader.load(str(signup_file))
        assert list(ruleset["rules"]) == ["name", "email", "role"]

    def test_load_json(self, loader, tmp_path):
        """Test that JSON documents are accepted."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"rules": {"age": "integer"}}))

        ruleset = loader.load(str(path))

        assert ruleset == {"rules": {"age": "integer"}, "messages": {}, "defaults": {}}

    def test_file_uri(self, loader, signup_file):
        """Test that file:// URIs are resolved."""
        ruleset = loader.load(signup_file.as_uri())
        assert "email" in ruleset["rules"]

    def test_empty_file(self, loader, tmp_path):
        """Test that an empty document yields empty sections."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert loader.load(str(path)) == {"rules": {}, "messages": {}, "defaults": {}}

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            loader.load(str(tmp_path / "nope.yaml"))

    def test_unsupported_scheme(self, loader):
        with pytest.raises(ValueError, match="Unsupported URI scheme"):
            loader.load("ftp://rules.example/signup.yaml")


class TestSchemaChecks:
    """Test rejection of malformed rule sets."""

    @pytest.mark.parametrize("content", [
        "rules: [required]",
        "rules:\n  name: 5",
        "messages:\n  name.required: [a, b]",
        "unknown: true",
        "- just a list",
    ])
    def test_malformed_rule_set(self, loader, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match="Invalid rule set"):
            loader.load(str(path))

    def test_unparseable_yaml(self, loader, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("rules: {name: [unclosed")

        with pytest.raises(ValueError, match="Failed to parse"):
            loader.load(str(path))


class TestRemote:
    """Test loading over HTTP(S)."""

    def test_fetches_remote_rule_set(self, loader, monkeypatch):
        """Test that the response body is parsed."""
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(SIGNUP_YAML)

        monkeypatch.setattr(requests, "get", fake_get)

        ruleset = loader.load("https://rules.example/signup.yaml")

        assert calls == [("https://rules.example/signup.yaml", ConfigLoader.FETCH_TIMEOUT)]
        assert ruleset["defaults"] == {"role": "member"}

    def test_http_error(self, loader, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda url, timeout: FakeResponse("", 404))

        with pytest.raises(RuntimeError, match="Failed to fetch"):
            loader.load("https://rules.example/missing.yaml")

    def test_connection_error(self, loader, monkeypatch):
        def fail(url, timeout):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(requests, "get", fail)

        with pytest.raises(RuntimeError, match="refused"):
            loader.load("http://rules.example/signup.yaml")


class TestFromConfig:
    """Test Validator.from_config()."""

    def test_builds_configured_validator(self, signup_file):
        """Test that defaults, rules and messages are all applied."""
        validator = Validator.from_config({"email": "ada@lovelace.org"}, str(signup_file))

        assert validator.data["role"] == "member"
        assert validator.validate() is False
        assert validator.errors() == {"name": ["Please tell us your name.", "name must be a string."]}

    def test_valid_record(self, signup_file):
        validator = Validator.from_config(
            {"name": "Ada", "email": "ada@lovelace.org", "role": "admin"},
            str(signup_file),
        )
        assert validator.validate() is True

    def test_uses_given_loader(self, signup_file):
        """Test that a caller-supplied loader is used."""
        class RecordingLoader(ConfigLoader):
            def __init__(self):
                self.sources = []

            def load(self, source):
                self.sources.append(source)
                return super().load(source)

        loader = RecordingLoader()
        Validator.from_config({}, str(signup_file), config_loader=loader)

        assert loader.sources == [str(signup_file)]
