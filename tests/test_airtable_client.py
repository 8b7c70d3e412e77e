import pytest
import requests

from conftest import FakeResponse, make_client, make_config
from src.airtable_client import (
    AirtableConfigError,
    AirtableError,
    AirtableRequestError,
    field_equals,
    normalized_name_equals,
    quote_formula_string,
)
from src.airtable_config import AirtableConfig, load_airtable_config


def test_formula_helpers_escape_quotes():
    assert quote_formula_string("O'Brien") == "'O\\'Brien'"
    assert field_equals("lookbookLabel", "MM") == "{lookbookLabel}='MM'"
    assert normalized_name_equals("Name", "jane doe") == (
        "LOWER(TRIM(REGEX_REPLACE(REGEX_REPLACE({Name}, '[^a-zA-Z0-9\\s]', ''), '\\s+', ' ')))='jane doe'"
    )


def test_list_records_sends_formula_sort_and_bearer_token():
    client, session = make_client(lambda *_: FakeResponse(body={"records": [{"id": "rec1", "fields": {}}]}))
    records = client.list_records("{x}='1'", sort=[("company", "asc")])

    assert [r["id"] for r in records] == ["rec1"]
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://api.airtable.com/v0/appBASE/Mentors"
    assert ("filterByFormula", "{x}='1'") in call["params"]
    assert ("sort[0][field]", "company") in call["params"]
    assert ("sort[0][direction]", "asc") in call["params"]
    assert call["headers"]["Authorization"] == "Bearer patTEST123456"
    assert call["timeout"] == 5


def test_patch_record_wraps_fields():
    client, session = make_client(lambda *_: FakeResponse(body={"id": "rec1", "fields": {"a": 1}}))
    client.patch_record("rec1", {"a": 1})
    call = session.calls[0]
    assert call["method"] == "PATCH"
    assert call["url"].endswith("/Mentors/rec1")
    assert call["json"] == {"fields": {"a": 1}}


def test_missing_config_raises_before_any_request():
    client, session = make_client(lambda *_: FakeResponse(body={}), AirtableConfig("companies"))
    with pytest.raises(AirtableConfigError) as excinfo:
        client.list_records()
    assert "COMPANY_AIRTABLE_API_TOKEN" in excinfo.value.missing
    assert session.calls == []


def test_error_status_carries_parsed_details():
    client, _ = make_client(
        lambda *_: FakeResponse(422, {"error": {"type": "INVALID_FILTER_BY_FORMULA"}}, reason="Unprocessable")
    )
    with pytest.raises(AirtableRequestError) as excinfo:
        client.list_records("bad(", action="fetch mentors")
    assert excinfo.value.status == 422
    assert excinfo.value.details == {"error": {"type": "INVALID_FILTER_BY_FORMULA"}}
    assert str(excinfo.value).startswith("Failed to fetch mentors: 422")


def test_error_status_with_plain_text_body():
    client, _ = make_client(lambda *_: FakeResponse(500, None, reason="Server Error", text="boom"))
    with pytest.raises(AirtableRequestError) as excinfo:
        client.get_record("rec1")
    assert excinfo.value.details == "boom"


def test_network_failure_is_wrapped():
    def _raise(*_):
        raise requests.ConnectionError("down")

    client, _ = make_client(_raise)
    with pytest.raises(AirtableError) as excinfo:
        client.list_records(action="fetch companies")
    assert str(excinfo.value) == "Failed to fetch companies: Network error or invalid response"
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_check_access_reports_configured_table():
    body = {"tables": [{"id": "tbl1", "name": "Mentors"}, {"id": "tbl2", "name": "Other"}]}
    client, session = make_client(lambda *_: FakeResponse(body=body))
    result = client.check_access()
    assert result["table_found"] is True
    assert result["tables"] == ["Mentors", "Other"]
    assert result["config"]["token"] == "patTE..."
    assert session.calls[0]["url"] == "https://api.airtable.com/v0/meta/bases/appBASE/tables"


def test_refresh_config_swaps_settings():
    client, _ = make_client(lambda *_: FakeResponse(body={"records": []}))
    client.refresh_config(make_config(table="Other"))
    assert client.config.table == "Other"


def test_load_config_reads_env(monkeypatch):
    monkeypatch.setenv("COMPANY_AIRTABLE_API_TOKEN", "patXYZ")
    monkeypatch.setenv("COMPANY_AIRTABLE_BASE_ID", "appC")
    monkeypatch.setenv("COMPANY_AIRTABLE_TABLE_ID", "tblC/viwX?blocks=hide")
    config = load_airtable_config("companies")
    assert (config.token, config.base_id, config.table) == ("patXYZ", "appC", "tblC")
    assert config.is_complete


def test_load_config_defaults_and_unknown_type(monkeypatch):
    for name in ("FOUNDER_ONBOARDING_AIRTABLE_API_TOKEN", "FOUNDER_ONBOARDING_AIRTABLE_BASE_ID",
                 "FOUNDER_ONBOARDING_AIRTABLE_TABLE_ID"):
        monkeypatch.delenv(name, raising=False)
    config = load_airtable_config("founderOnboarding")
    assert config.table == "tbldVJRW3MbvxyHAv"
    assert not config.is_complete
    with pytest.raises(ValueError):
        load_airtable_config("nope")
