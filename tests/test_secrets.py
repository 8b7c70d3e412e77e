import pytest

from src import secrets
from src.airtable_config import setting_sources


def test_get_secret_prefers_env(monkeypatch):
    monkeypatch.setenv("LOOKBOOK_TEST_SECRET", "from-env")
    assert secrets.secret_source("LOOKBOOK_TEST_SECRET") == secrets.SOURCE_ENV
    assert secrets.get_secret("LOOKBOOK_TEST_SECRET") == "from-env"


def test_get_secret_reads_secret_manager_resource(monkeypatch):
    monkeypatch.delenv("LOOKBOOK_TEST_SECRET", raising=False)
    monkeypatch.setenv("LOOKBOOK_TEST_SECRET_RESOURCE", "projects/p/secrets/s/versions/latest")
    monkeypatch.setattr(secrets, "_sm_get", lambda resource: f"value-of:{resource}")
    assert secrets.get_secret("LOOKBOOK_TEST_SECRET") == "value-of:projects/p/secrets/s/versions/latest"


def test_get_secret_default_and_missing(monkeypatch):
    monkeypatch.delenv("LOOKBOOK_TEST_SECRET", raising=False)
    monkeypatch.delenv("LOOKBOOK_TEST_SECRET_RESOURCE", raising=False)
    assert secrets.get_secret("LOOKBOOK_TEST_SECRET", default="") == ""
    with pytest.raises(RuntimeError):
        secrets.get_secret("LOOKBOOK_TEST_SECRET")


def test_setup_secrets_writes_env_file(monkeypatch, tmp_path):
    monkeypatch.setattr(secrets, "_SECRETS_DIR", tmp_path / "secrets")
    monkeypatch.delenv("ENV_FILE", raising=False)
    assert secrets.setup_secrets("test") is None

    monkeypatch.setenv("ENV_FILE", "AIRTABLE_BASE_ID=appX\n")
    path = secrets.setup_secrets("test")
    assert path == tmp_path / "secrets" / "env.test"
    assert path.read_text(encoding="utf-8") == "AIRTABLE_BASE_ID=appX\n"


def test_setting_sources_reports_each_variable(monkeypatch):
    monkeypatch.setenv("AIRTABLE_API_TOKEN", "pat")
    for name in ("AIRTABLE_BASE_ID", "AIRTABLE_BASE_ID_RESOURCE", "AIRTABLE_TABLE_NAME", "AIRTABLE_TABLE_NAME_RESOURCE"):
        monkeypatch.delenv(name, raising=False)
    assert setting_sources("mentors") == {
        "AIRTABLE_API_TOKEN": "env",
        "AIRTABLE_BASE_ID": "missing",
        "AIRTABLE_TABLE_NAME": "default",
    }
