import sys
import os
from pathlib import Path

# Set up the script directory and ensure it's in sys.path
script_directory = Path(__file__).resolve().parent
if str(script_directory) not in sys.path:
    sys.path.append(str(script_directory))

from dotenv import load_dotenv

from src.secrets import env_file_path, setup_secrets

import argparse
import logging
import uvicorn

if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--port", type=int, default=8086)
    ap.add_argument("--env", type=str, default="dev")
    ap.add_argument(
        "--allow-missing-env",
        action="store_true",
        help="Start even when secrets/env.<env> is absent (settings come from the process env).",
    )

    args = ap.parse_args()

    # If the env file is delivered via an environment variable (Cloud Run), materialize it.
    setup_secrets(args.env)

    env_path = env_file_path(args.env)
    if env_path.exists():
        load_dotenv(env_path, override=True)
    elif not args.allow_missing_env:
        raise FileNotFoundError(f"Could not find an environment file for '{args.env}'. ")

    logging.basicConfig(level=os.getenv("LOOKBOOK_LOG_LEVEL", "INFO"))

    # This is the last thing to do because first we need the secrets imported
    from app import app
    uvicorn.run(app, host="0.0.0.0", port=args.port)
