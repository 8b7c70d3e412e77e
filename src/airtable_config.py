from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from src.secrets import get_secret, secret_source

CONFIG_MENTORS = "mentors"
CONFIG_FOUNDERS = "founders"
CONFIG_COMPANIES = "companies"
CONFIG_FOUNDER_ONBOARDING = "founderOnboarding"

DEFAULT_MENTORS_TABLE = "Mentors"
DEFAULT_FOUNDER_ONBOARDING_TABLE = "tbldVJRW3MbvxyHAv"

# config type -> (token var, base var, table var, table default)
_SETTING_NAMES: Dict[str, Tuple[str, str, str, str]] = {
    CONFIG_MENTORS: (
        "AIRTABLE_API_TOKEN",
        "AIRTABLE_BASE_ID",
        "AIRTABLE_TABLE_NAME",
        DEFAULT_MENTORS_TABLE,
    ),
    CONFIG_FOUNDERS: (
        "FOUNDER_AIRTABLE_API_TOKEN",
        "FOUNDER_AIRTABLE_BASE_ID",
        "FOUNDER_AIRTABLE_TABLE_ID",
        "",
    ),
    CONFIG_COMPANIES: (
        "COMPANY_AIRTABLE_API_TOKEN",
        "COMPANY_AIRTABLE_BASE_ID",
        "COMPANY_AIRTABLE_TABLE_ID",
        "",
    ),
    CONFIG_FOUNDER_ONBOARDING: (
        "FOUNDER_ONBOARDING_AIRTABLE_API_TOKEN",
        "FOUNDER_ONBOARDING_AIRTABLE_BASE_ID",
        "FOUNDER_ONBOARDING_AIRTABLE_TABLE_ID",
        DEFAULT_FOUNDER_ONBOARDING_TABLE,
    ),
}

CONFIG_TYPES: Tuple[str, ...] = tuple(_SETTING_NAMES)


def _clean_table_name(value: str) -> str:
    return str(value or "").split("/")[0].split("?")[0].strip()


@dataclass(frozen=True)
class AirtableConfig:
    config_type: str
    token: str = ""
    base_id: str = ""
    table: str = ""

    def missing(self) -> List[str]:
        """Names of the settings that must be provided before any request."""
        token_var, base_var, table_var, _default = _SETTING_NAMES.get(
            self.config_type, ("token", "baseId", "table", "")
        )
        missing: List[str] = []
        if not self.token:
            missing.append(token_var)
        if not self.base_id:
            missing.append(base_var)
        if not self.table:
            missing.append(table_var)
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing()

    def safe_summary(self) -> Dict[str, str]:
        token_prefix = f"{self.token[:5]}..." if self.token else "none"
        return {
            "type": self.config_type,
            "token": token_prefix,
            "base_id": self.base_id or "none",
            "table": self.table or "none",
        }


def load_airtable_config(config_type: str) -> AirtableConfig:
    """Resolve the settings for one table type. Missing values come back empty, never raise."""
    if config_type not in _SETTING_NAMES:
        raise ValueError(
            f"Invalid configuration type requested: {config_type} (available: {', '.join(CONFIG_TYPES)})"
        )
    token_var, base_var, table_var, table_default = _SETTING_NAMES[config_type]
    return AirtableConfig(
        config_type=config_type,
        token=get_secret(token_var, default="").strip(),
        base_id=get_secret(base_var, default="").strip(),
        table=_clean_table_name(get_secret(table_var, default=table_default)) or table_default,
    )


def setting_sources(config_type: str) -> Dict[str, str]:
    """Which source (env, secret-manager, default, missing) each setting of a table type resolves from."""
    if config_type not in _SETTING_NAMES:
        raise ValueError(f"Invalid configuration type requested: {config_type}")
    token_var, base_var, table_var, table_default = _SETTING_NAMES[config_type]
    return {
        token_var: secret_source(token_var),
        base_var: secret_source(base_var),
        table_var: secret_source(table_var, table_default or None),
    }
