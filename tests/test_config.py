"""Tests for environment configuration loading."""

import pytest

from scoreattest.config import AttestConfig
from scoreattest.errors import ConfigError

from conftest import SCHEMA_UID, SCORER_URL, TEST_ENV


def test_from_env_reads_all_required():
    config = AttestConfig.from_env(TEST_ENV)
    assert config.rpc_url == "http://127.0.0.1:8545"
    assert config.scorer_endpoint == SCORER_URL
    assert config.scorer_id == 335
    assert config.schema_id == SCHEMA_UID
    assert config.batch_size == 5
    assert config.request_delay == 1.0


def test_from_env_uses_process_environment(env):
    assert AttestConfig.from_env().scorer_api_key == "secret-key"


def test_optional_overrides():
    config = AttestConfig.from_env({**TEST_ENV, "BATCH_SIZE": "10", "REQUEST_DELAY": "0"})
    assert config.batch_size == 10
    assert config.request_delay == 0.0


def test_missing_variables_listed():
    env = dict(TEST_ENV)
    del env["PRIVATE_KEY"]
    env["SCHEMA_UID"] = "  "
    with pytest.raises(ConfigError) as exc_info:
        AttestConfig.from_env(env)
    assert exc_info.value.missing == ["PRIVATE_KEY", "SCHEMA_UID"]
    assert "PRIVATE_KEY" in str(exc_info.value)


def test_empty_environment():
    with pytest.raises(ConfigError) as exc_info:
        AttestConfig.from_env({})
    assert len(exc_info.value.missing) == 7


def test_community_id_must_be_integer():
    with pytest.raises(ConfigError, match="COMMUNITY_ID"):
        AttestConfig.from_env({**TEST_ENV, "COMMUNITY_ID": "abc"})


def test_invalid_batch_size():
    with pytest.raises(ConfigError):
        AttestConfig.from_env({**TEST_ENV, "BATCH_SIZE": "many"})
    with pytest.raises(ConfigError):
        AttestConfig.from_env({**TEST_ENV, "BATCH_SIZE": "0"})


def test_negative_delay_rejected():
    with pytest.raises(ConfigError):
        AttestConfig.from_env({**TEST_ENV, "REQUEST_DELAY": "-1"})


def test_secrets_hidden_from_repr():
    text = repr(AttestConfig.from_env(TEST_ENV))
    assert TEST_ENV["PRIVATE_KEY"] not in text
    assert "secret-key" not in text


def test_config_is_immutable():
    config = AttestConfig.from_env(TEST_ENV)
    with pytest.raises(AttributeError):
        config.batch_size = 3


def test_with_overrides_ignores_none():
    config = AttestConfig.from_env(TEST_ENV)
    changed = config.with_overrides(batch_size=2, request_delay=None)
    assert changed.batch_size == 2
    assert changed.request_delay == config.request_delay
    assert config.batch_size == 5
