# ==============================================
# Tests for Configuration
# ==============================================

import pytest

from ewaste.config import StorageConfig, get_config, reset_config
from ewaste.errors import ConfigError

ENV_VARS = [
    "STORAGE_BACKEND", "DATA_DIR", "MONGO_HOST", "MONGO_PORT", "MONGO_USER",
    "MONGO_PASSWORD", "MONGO_DATABASE", "MONGO_COLLECTION", "ADMIN_EMAIL",
    "ADMIN_PASSWORD", "ADMIN_NAME", "ADMIN_ID", "STABLE_IDENTITY_IDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()


class TestGetConfig:
    def test_defaults(self, clean_env):
        config = get_config()
        assert config.storage.backend == "file"
        assert config.mongo.port == 27017
        assert config.session.admin_email == "admin@example.com"
        assert config.session.admin_id == "1"
        assert config.session.stable_identity_ids is True

    def test_reads_environment(self, clean_env):
        clean_env.setenv("STORAGE_BACKEND", " Mongo ")
        clean_env.setenv("MONGO_PORT", "27018")
        clean_env.setenv("ADMIN_EMAIL", "root@example.com")
        clean_env.setenv("STABLE_IDENTITY_IDS", "no")
        config = get_config()
        assert config.storage.backend == "mongo"
        assert config.mongo.port == 27018
        assert config.session.admin_email == "root@example.com"
        assert config.session.stable_identity_ids is False

    def test_singleton_until_reset(self, clean_env):
        first = get_config()
        clean_env.setenv("DATA_DIR", "/tmp/elsewhere")
        assert get_config() is first
        reset_config()
        assert get_config().storage.data_dir == "/tmp/elsewhere"

    @pytest.mark.parametrize("name, value", [
        ("MONGO_PORT", "not-a-port"),
        ("STORAGE_BACKEND", "sqlite"),
        ("STABLE_IDENTITY_IDS", "maybe"),
    ])
    def test_bad_values_rejected(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ConfigError):
            get_config()


def test_storage_backend_validated():
    with pytest.raises(ConfigError):
        StorageConfig(backend="redis")
