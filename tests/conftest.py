import json as jsonlib
import re
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

# Ensure the repo root is importable when tests run from anywhere
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.airtable_client import AirtableClient
from src.airtable_config import AirtableConfig


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK", text: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.text = text if text is not None else ("" if body is None else jsonlib.dumps(body))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


Handler = Callable[[str, str, Optional[List[Tuple[str, str]]], Optional[Dict[str, Any]]], FakeResponse]


class FakeSession:
    """Stands in for `requests.Session`; every call is recorded and answered by `handler`."""

    def __init__(self, handler: Handler):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": list(params or []),
                "json": json,
                "headers": dict(headers or {}),
                "timeout": timeout,
            }
        )
        return self.handler(method, url, params, json)


class RecordTable:
    """In-memory table answering list, get and PATCH the way the Airtable REST API does."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self.records: List[Dict[str, Any]] = [
            {"id": record["id"], "fields": dict(record.get("fields") or {})} for record in records or []
        ]
        self.list_filter: Optional[Callable[[Dict[str, Any], str], bool]] = None

    def _find(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self.records:
            if record["id"] == record_id:
                return record
        return None

    def __call__(self, method, url, params, payload) -> FakeResponse:
        tail = url.rstrip("/").rsplit("/", 1)[-1]
        if method == "GET" and not tail.startswith("rec"):
            formula = dict(params or []).get("filterByFormula", "")
            records = self.records
            if self.list_filter is not None:
                records = [record for record in records if self.list_filter(record, formula)]
            return FakeResponse(body={"records": records})
        record = self._find(tail)
        if record is None:
            return FakeResponse(404, {"error": "NOT_FOUND"}, reason="Not Found")
        if method == "PATCH":
            record["fields"].update((payload or {}).get("fields") or {})
        return FakeResponse(body=record)


_NAME_FIELD_RE = re.compile(r"REGEX_REPLACE\(\{([^}]+)\}")
_REGEX_STEP_RE = re.compile(r", '((?:[^'\\]|\\.)*)', '((?:[^'\\]|\\.)*)'\)")
_COMPARED_KEY_RE = re.compile(r"\)='((?:[^'\\]|\\.)*)'")


def airtable_name_filter(record: Dict[str, Any], formula: str) -> bool:
    """Evaluate the normalized-name comparison in `formula` against `record` the way Airtable does.

    Every `REGEX_REPLACE` step in the formula is applied in order, then `TRIM` and `LOWER`.
    Formulas without a name comparison match every record.
    """
    field_match = _NAME_FIELD_RE.search(formula)
    keys = _COMPARED_KEY_RE.findall(formula)
    if field_match is None or not keys:
        return True
    value = str(record["fields"].get(field_match.group(1)) or "")
    for pattern, replacement in _REGEX_STEP_RE.findall(formula):
        value = re.sub(pattern, replacement, value)
    if "TRIM(" in formula:
        value = value.strip(" ")
    if "LOWER(" in formula:
        value = value.lower()
    expected = keys[-1].replace("\\'", "'").replace("\\\\", "\\")
    return value == expected


def make_config(config_type: str = "mentors", **overrides: str) -> AirtableConfig:
    values = {"token": "patTEST123456", "base_id": "appBASE", "table": "Mentors"}
    values.update(overrides)
    return AirtableConfig(config_type=config_type, **values)


def make_client(handler: Handler, config: Optional[AirtableConfig] = None):
    session = FakeSession(handler)
    return AirtableClient(config or make_config(), session=session, timeout=5), session


@pytest.fixture
def record_table():
    return RecordTable()


@pytest.fixture
def table_client(record_table):
    client, session = make_client(record_table)
    return client, session


@pytest.fixture(autouse=True)
def clear_lookbook_env(monkeypatch):
    for name in ("LOOKBOOK_PLACEHOLDER_IMAGES", "LOOKBOOK_INTRO_EMAIL", "LOOKBOOK_AIRTABLE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
