import json
from http import HTTPMethod

import pytest

from httpchain_pool import DefinitionError, LoaderError, Ref, ValuePath, load_definitions

YAML_CONFIG = """
input_user:
  Get:
    url: https://api.example.com/users
    path:
      - Ref: user_id
    params:
      expand:
        Const: true
    value: data.0.name
login:
  Post:
    url: https://api.example.com/login
    path: []
    params: {}
    value: ""
"""


class TestLoadDefinitions:
    def test_yaml(self, tmp_path):
        config = tmp_path / "requests.yaml"
        config.write_text(YAML_CONFIG)

        definitions = load_definitions(config)

        assert set(definitions) == {"input_user", "login"}
        assert definitions["input_user"].path == (Ref(name="user_id"),)
        assert definitions["input_user"].params["expand"].value is True
        assert definitions["input_user"].extractor == ValuePath.parse("data.0.name")
        assert definitions["login"].method == HTTPMethod.POST

    def test_json(self, tmp_path):
        config = tmp_path / "requests.json"
        config.write_text(json.dumps({"me": {"Get": {"url": "https://api.example.com/me", "value": "id"}}}))

        definitions = load_definitions(str(config))

        assert definitions["me"].url == "https://api.example.com/me"

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoaderError, match="Failed to load request definitions"):
            load_definitions(tmp_path / "missing.yaml")

    def test_malformed_json(self, tmp_path):
        config = tmp_path / "requests.json"
        config.write_text("{not json")
        with pytest.raises(LoaderError, match="Failed to load request definitions"):
            load_definitions(config)

    def test_malformed_yaml(self, tmp_path):
        config = tmp_path / "requests.yml"
        config.write_text("a: [1, 2")
        with pytest.raises(LoaderError):
            load_definitions(config)

    def test_not_a_mapping(self, tmp_path):
        config = tmp_path / "requests.json"
        config.write_text("[]")
        with pytest.raises(LoaderError, match="Expected a mapping"):
            load_definitions(config)

    def test_invalid_definition(self, tmp_path):
        config = tmp_path / "requests.json"
        config.write_text(json.dumps({"me": {"Get": {"value": "id"}}}))
        with pytest.raises(DefinitionError, match="me"):
            load_definitions(config)
