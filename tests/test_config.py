import pytest

from webapi_client import ConfigurationError, RequestsTransport, load_environment, load_environments
from webapi_client.config import config as config_module

from conftest import FakeTransport


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("WEBAPI_BASE_URL", "WEBAPI_ENVIRONMENT", "WEBAPI_CONFIG", "WEBAPI_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    # keep a developer's local .env out of the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)


@pytest.fixture
def environments_file(tmp_path):
    path = tmp_path / "environments.yaml"
    path.write_text(
        "environments:\n"
        "  production:\n"
        "    base_url: https://api.example.com/v1/\n"
        "  staging:\n"
        "    base_url: https://staging.example.com/v1/\n"
    )
    return str(path)


def test_load_environments_reads_all_entries(environments_file):
    transport = FakeTransport()
    envs = load_environments(environments_file, transport=transport)

    assert sorted(envs) == ["production", "staging"]
    assert envs["production"].name == "production"
    assert envs["production"].base_url == "https://api.example.com/v1/"
    assert envs["staging"].transport is transport


def test_load_environments_requires_base_url(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("environments:\n  broken:\n    timeout: 3\n")
    with pytest.raises(ConfigurationError, match="broken"):
        load_environments(str(path))


@pytest.mark.parametrize(
    "entry",
    ["https://api.example.com/", '["https://api.example.com/"]', "null"],
)
def test_load_environments_requires_mapping_entries(tmp_path, entry):
    path = tmp_path / "bad.yaml"
    path.write_text(f"environments:\n  production: {entry}\n")
    with pytest.raises(ConfigurationError, match="production"):
        load_environments(str(path))


def test_load_environments_requires_environments_mapping(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ConfigurationError):
        load_environments(str(path))


def test_load_environments_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_environments(str(tmp_path / "nope.yaml"))


def test_base_url_env_var_takes_precedence(monkeypatch, environments_file):
    monkeypatch.setenv("WEBAPI_BASE_URL", "https://override.example.com/")
    monkeypatch.setenv("WEBAPI_ENVIRONMENT", "production")

    env = load_environment(path=environments_file)

    assert env.name == "production"
    assert env.base_url == "https://override.example.com/"
    assert isinstance(env.transport, RequestsTransport)


def test_environment_name_is_looked_up_in_yaml(monkeypatch, environments_file):
    monkeypatch.setenv("WEBAPI_CONFIG", environments_file)
    monkeypatch.setenv("WEBAPI_ENVIRONMENT", "staging")

    env = load_environment()
    assert env.base_url == "https://staging.example.com/v1/"


def test_explicit_name_overrides_env_var(monkeypatch, environments_file):
    monkeypatch.setenv("WEBAPI_ENVIRONMENT", "staging")
    env = load_environment(name="production", path=environments_file)
    assert env.name == "production"


def test_unknown_environment_name(environments_file):
    with pytest.raises(ConfigurationError, match="Unknown environment 'qa'"):
        load_environment(name="qa", path=environments_file)


def test_missing_config_file_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        load_environment(path=str(tmp_path / "missing.yaml"))


def test_bundled_default_environment():
    env = load_environment()
    assert env.name == "default"
    assert env.base_url == "http://localhost:8080/"


def test_timeout_env_var_configures_default_transport(monkeypatch):
    monkeypatch.setenv("WEBAPI_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("WEBAPI_TIMEOUT", "2.5")
    assert load_environment().transport.timeout == 2.5


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("WEBAPI_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("WEBAPI_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError, match="WEBAPI_TIMEOUT"):
        load_environment()
