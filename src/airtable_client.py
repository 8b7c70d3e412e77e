from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

import requests

from src.airtable_config import AirtableConfig, load_airtable_config
from src.page_timing import http_call_timer, log_timing

logger = logging.getLogger(__name__)

API_ROOT = "https://api.airtable.com/v0"
DEFAULT_TIMEOUT_SECONDS = 30.0

RawRecord = Mapping[str, Any]


def _resolve_timeout() -> float:
    raw_value = str(os.getenv("LOOKBOOK_AIRTABLE_TIMEOUT", "")).strip()
    if not raw_value:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        parsed = float(raw_value)
    except ValueError:
        logger.warning(
            "Invalid LOOKBOOK_AIRTABLE_TIMEOUT=%r; using default %s.",
            raw_value,
            DEFAULT_TIMEOUT_SECONDS,
        )
        return DEFAULT_TIMEOUT_SECONDS
    return parsed if parsed > 0 else DEFAULT_TIMEOUT_SECONDS


class AirtableError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status = status
        self.details = details


class AirtableConfigError(AirtableError):
    def __init__(self, config_type: str, missing: Sequence[str]):
        self.config_type = config_type
        self.missing = list(missing)
        super().__init__(
            f"Airtable configuration for {config_type} is not complete (missing: {', '.join(self.missing)})"
        )


class AirtableRequestError(AirtableError):
    pass


def quote_formula_string(value: str) -> str:
    """Render `value` as a single-quoted formula string literal."""
    escaped = str(value or "").replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def field_equals(field_name: str, value: str) -> str:
    return f"{{{field_name}}}={quote_formula_string(value)}"


def normalized_name_equals(field_name: str, lookup_key: str) -> str:
    """Formula form of `name_lookup_key` applied to `field_name`, compared with `lookup_key`."""
    stripped = f"REGEX_REPLACE({{{field_name}}}, '[^a-zA-Z0-9\\s]', '')"
    return (
        f"LOWER(TRIM(REGEX_REPLACE({stripped}, '\\s+', ' ')))="
        f"{quote_formula_string(lookup_key)}"
    )


def _parse_error_body(response: requests.Response) -> Any:
    text_value = response.text
    try:
        return json.loads(text_value)
    except (TypeError, ValueError):
        return text_value


class AirtableClient:
    """Blocking client for one Airtable table. Configuration is fixed until `refresh_config`."""

    def __init__(
        self,
        config: AirtableConfig,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._timeout = timeout if timeout is not None else _resolve_timeout()

    @property
    def config(self) -> AirtableConfig:
        return self._config

    def refresh_config(self, config: Optional[AirtableConfig] = None) -> AirtableConfig:
        self._config = config or load_airtable_config(self._config.config_type)
        logger.info("Refreshed Airtable config: %s", self._config.safe_summary())
        return self._config

    def _require_config(self) -> AirtableConfig:
        missing = self._config.missing()
        if missing:
            logger.error(
                "Missing Airtable settings for %s: %s", self._config.config_type, ", ".join(missing)
            )
            raise AirtableConfigError(self._config.config_type, missing)
        return self._config

    def _table_url(self, record_id: str = "") -> str:
        config = self._require_config()
        url = f"{API_ROOT}/{quote(config.base_id, safe='')}/{quote(config.table, safe='')}"
        if record_id:
            url = f"{url}/{quote(record_id, safe='')}"
        return url

    def _request(
        self,
        method: str,
        url: str,
        *,
        action: str,
        params: Optional[List[Tuple[str, str]]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        config = self._require_config()
        headers = {"Authorization": f"Bearer {config.token}"}
        if payload is not None:
            headers["Content-Type"] = "application/json"

        start = time.perf_counter()
        try:
            with http_call_timer(action):
                response = self._session.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    headers=headers,
                    timeout=self._timeout,
                )
        except requests.RequestException as exc:
            logger.error("Airtable %s %s failed: %s", method, url, exc)
            raise AirtableError(f"Failed to {action}: Network error or invalid response") from exc

        log_timing(
            "airtable",
            action.replace(" ", "_"),
            start,
            method=method,
            status=response.status_code,
            table=config.table,
        )

        if not response.ok:
            details = _parse_error_body(response)
            logger.error(
                "Airtable API error: status=%s reason=%s url=%s details=%s",
                response.status_code,
                response.reason,
                url,
                details,
            )
            raise AirtableRequestError(
                f"Failed to {action}: {response.status_code} {response.reason}",
                response.status_code,
                details,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise AirtableError(f"Failed to {action}: Network error or invalid response") from exc
        if not isinstance(data, dict):
            raise AirtableError(f"Failed to {action}: Network error or invalid response")
        return data

    def list_records(
        self,
        filter_formula: Optional[str] = None,
        sort: Optional[Sequence[Tuple[str, str]]] = None,
        *,
        action: str = "list records",
    ) -> List[RawRecord]:
        params: List[Tuple[str, str]] = []
        if filter_formula:
            params.append(("filterByFormula", filter_formula))
        for index, (field_name, direction) in enumerate(sort or ()):
            params.append((f"sort[{index}][field]", field_name))
            params.append((f"sort[{index}][direction]", direction))
        data = self._request("GET", self._table_url(), action=action, params=params or None)
        records = data.get("records")
        if not isinstance(records, list):
            raise AirtableError(f"Failed to {action}: Network error or invalid response")
        return [record for record in records if isinstance(record, Mapping)]

    def get_record(self, record_id: str, *, action: str = "fetch record") -> RawRecord:
        return self._request("GET", self._table_url(record_id), action=action)

    def patch_record(
        self,
        record_id: str,
        fields: Mapping[str, Any],
        *,
        action: str = "update record",
    ) -> RawRecord:
        return self._request(
            "PATCH",
            self._table_url(record_id),
            action=action,
            payload={"fields": dict(fields)},
        )

    def _fetch_table_meta(self) -> List[Mapping[str, Any]]:
        config = self._require_config()
        url = f"{API_ROOT}/meta/bases/{quote(config.base_id, safe='')}/tables"
        data = self._request("GET", url, action="list tables")
        tables = data.get("tables") or []
        return [table for table in tables if isinstance(table, Mapping)]

    def list_tables(self) -> List[str]:
        names = [str(table.get("name") or "") for table in self._fetch_table_meta()]
        logger.info("Fetched %d Airtable tables for %s", len(names), self._config.config_type)
        return names

    def check_access(self) -> Dict[str, Any]:
        """Verify the token can read the base and report whether the configured table exists."""
        config = self._require_config()
        logger.info("Testing Airtable access with %s", config.safe_summary())
        tables = self._fetch_table_meta()
        known = {str(table.get("name") or "") for table in tables}
        known.update(str(table.get("id") or "") for table in tables)
        return {
            "config": config.safe_summary(),
            "tables": sorted(name for name in (str(t.get("name") or "") for t in tables) if name),
            "table_found": config.table in known,
        }
