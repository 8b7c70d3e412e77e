"""Check that the Airtable settings for one table type can reach the API and see the configured table."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.airtable_client import AirtableClient, AirtableError  # noqa: E402
from src.airtable_config import CONFIG_TYPES, load_airtable_config, setting_sources  # noqa: E402
from src.secrets import env_file_path  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config_type", choices=CONFIG_TYPES)
    parser.add_argument("--env", default="dev", help="Loads secrets/env.<env> when present.")
    parser.add_argument("--list-tables", action="store_true", help="Print every table name in the base.")
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    env_path = env_file_path(args.env)
    if env_path.exists():
        load_dotenv(env_path, override=True)

    for setting, source in setting_sources(args.config_type).items():
        print(f"{setting}: {source}", file=sys.stderr)

    client = AirtableClient(load_airtable_config(args.config_type))
    try:
        if args.list_tables:
            for name in client.list_tables():
                print(name)
            return 0
        result = client.check_access()
    except AirtableError as exc:
        print(f"Airtable check failed: {exc}", file=sys.stderr)
        if exc.details:
            print(json.dumps(exc.details, indent=2, default=str), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0 if result.get("table_found") else 2


if __name__ == "__main__":
    raise SystemExit(main())
