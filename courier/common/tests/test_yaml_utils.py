"""Tests for YAML loading with environment variable support."""

import os
from unittest.mock import patch

import pytest
import yaml

from courier.common.yaml_utils import safe_load_with_env


class TestEnvTag:
    @pytest.mark.parametrize("scenario,yaml_content,env_vars,expected", [
        ("required env var present", "api_key: !env TEST_API_KEY", {'TEST_API_KEY': 'secret-key-123'}, {'api_key': 'secret-key-123'}),
        ("optional env var present", "timeout: !env [TEST_TIMEOUT, 30]", {'TEST_TIMEOUT': '5'}, {'timeout': '5'}),
        ("optional env var missing keeps default type", "timeout: !env [MISSING_TIMEOUT, 30]", {}, {'timeout': 30}),
        ("optional env var missing with null default", "proxy: !env [MISSING_PROXY, null]", {}, {'proxy': None}),
    ])
    def test_env_var_scenarios(self, scenario, yaml_content, env_vars, expected):
        with patch.dict(os.environ, env_vars, clear=True):
            assert safe_load_with_env(yaml_content) == expected

    def test_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Required environment variable 'MISSING_API_KEY' is not set"):
                safe_load_with_env('api_key: !env MISSING_API_KEY')

    @pytest.mark.parametrize('invalid_sequence', ['[SINGLE_ITEM]', '[VAR_NAME, default, extra_item]'])
    def test_invalid_sequence_lengths(self, invalid_sequence):
        with pytest.raises(yaml.constructor.ConstructorError, match='must have exactly 2 elements'):
            safe_load_with_env(f'api_key: !env {invalid_sequence}')

    def test_invalid_node_type(self):
        with pytest.raises(yaml.constructor.ConstructorError, match='expects scalar'):
            safe_load_with_env('api_key: !env {key: value}')

    def test_plain_safe_load_is_untouched(self):
        with pytest.raises(yaml.constructor.ConstructorError):
            yaml.safe_load('api_key: !env SOMETHING')
