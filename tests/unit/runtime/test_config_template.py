"""Unit tests for config_template module."""

import os
from unittest.mock import patch

import pytest

from src.catalogo.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            assert substitute_env_vars(text) == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_env_var_with_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_env_var_with_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable TOKEN_SIGNING_SECRET: needed for tokens",
            ):
                substitute_env_vars("${TOKEN_SIGNING_SECRET:?needed for tokens}")


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_promoted(self):
        with patch.dict(os.environ, {"TEST_DATABASE_URL": "sqlite://"}, clear=True):
            apply_environment_overrides("test")
            assert os.environ["DATABASE_URL"] == "sqlite://"


class TestLoadTemplatedYaml:
    def test_load_config_with_substitution(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
config:
  app:
    environment: test
    token_signing_secret: ${SECRET:-fallback}
  database:
    url: ${DATABASE_URL:-sqlite:///./default.db}
  pagination:
    default_page_size: 10
    max_page_size: 25
  api_versioning:
    supported_versions: ["1.0", "1.1", "2.0"]
"""
        )
        with patch.dict(
            os.environ, {"APP_ENVIRONMENT": "test", "TEST_DATABASE_URL": "sqlite://"}, clear=True
        ):
            config = load_templated_yaml(config_file)

        assert config.app.environment == "test"
        assert config.app.token_signing_secret == "fallback"
        assert config.database.url == "sqlite://"
        assert config.pagination.default_page_size == 10
        assert config.api_versioning.supported_versions == ["1.0", "1.1", "2.0"]
        assert config.authorization.admin_role == "Administrador"

    def test_invalid_values_are_reported(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
config:
  pagination:
    default_page_size: 100
    max_page_size: 50
"""
        )
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file)

    def test_empty_file_is_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        with pytest.raises(ValueError):
            load_templated_yaml(config_file)

    def test_repository_config_file_loads(self):
        with patch.dict(os.environ):
            config = load_templated_yaml("config.yaml")

        assert config.jwt.issuer == "catalogo-api"
        assert config.pagination.max_page_size == 50
        assert config.api_versioning.header == "X-Version"
        assert config.logging.file == ""
