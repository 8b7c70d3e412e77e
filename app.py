# ---- Resolve & inject ALL secrets BEFORE importing modules that read env ----
from src.secrets import get_secret

import logging
import os
from pathlib import Path
from urllib.parse import quote

import gradio as gr
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse
from starlette.staticfiles import StaticFiles
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from src.airtable_client import AirtableClient
from src.airtable_config import (
    CONFIG_COMPANIES,
    CONFIG_FOUNDER_ONBOARDING,
    CONFIG_MENTORS,
    load_airtable_config,
)
from src.pages.companies.app_companies import make_companies_app
from src.pages.company_display.app_company_display import make_company_display_app
from src.pages.founder_display.app_founder_display import make_founder_display_app
from src.pages.mentor_display.app_mentor_display import make_mentor_display_app
from src.pages.mentors.app_mentors import make_mentors_app
from src.records import ADDITIONAL_MENTOR_LABEL, MAIN_MENTOR_LABEL

logger = logging.getLogger(__name__)

app = FastAPI()
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

# Old client-side routes -> (display page, slug captured from the path)
LEGACY_SLUG_ROUTES = {
    "mentor": "/mentor-display/",
    "founders": "/founder-display/",
    "companies": "/company-display/",
}
# `/companies` is also a Gradio mount; its own second-level paths must pass through.
GRADIO_RESERVED_SEGMENTS = {
    "assets",
    "config",
    "custom_component",
    "file",
    "gradio_api",
    "heartbeat",
    "info",
    "login",
    "logout",
    "monitoring",
    "proxy",
    "queue",
    "startup-events",
    "static",
    "svelte",
    "upload",
    "user",
}


def _legacy_slug_target(path: str, accept: str) -> str | None:
    parts = path.strip("/").split("/")
    if len(parts) != 2 or parts[0] not in LEGACY_SLUG_ROUTES:
        return None
    slug = parts[1].strip().lower()
    if not slug or slug in GRADIO_RESERVED_SEGMENTS or "." in slug or "=" in slug:
        return None
    if "text/html" not in accept:
        return None
    return f"{LEGACY_SLUG_ROUTES[parts[0]]}?slug={quote(slug, safe='-')}"


@app.get("/_routes")
def _routes():
    return [getattr(r, "path", str(r)) for r in app.router.routes]


@app.middleware("http")
async def redirect_legacy_slug_paths(request: Request, call_next):
    normalized_path = (request.url.path or "/").rstrip("/") or "/"
    if normalized_path == "/":
        return RedirectResponse(url="/mentors/", status_code=307)
    if request.method == "GET":
        target = _legacy_slug_target(normalized_path, request.headers.get("accept", ""))
        if target:
            return RedirectResponse(url=target, status_code=307)
    return await call_next(request)


# --- Static assets
os.makedirs("images", exist_ok=True)
FAVICON_FILE = Path("images") / get_secret("LOOKBOOK_FAVICON", default="lookbook-logo.png")
app.mount(
    "/images",
    StaticFiles(directory="images", check_dir=False),
    name="images",
)


@app.get("/favicon.ico")
async def favicon() -> FileResponse:
    if FAVICON_FILE.exists():
        return FileResponse(FAVICON_FILE)
    raise HTTPException(status_code=404)


# --- Airtable clients, one per table
mentor_client = AirtableClient(load_airtable_config(CONFIG_MENTORS))
founder_client = AirtableClient(load_airtable_config(CONFIG_FOUNDER_ONBOARDING))
company_client = AirtableClient(load_airtable_config(CONFIG_COMPANIES))
for _client in (mentor_client, founder_client, company_client):
    if not _client.config.is_complete:
        logger.warning(
            "Airtable config %s is incomplete (missing %s); its pages will show an error.",
            _client.config.config_type,
            ", ".join(_client.config.missing()),
        )

# --- Pages
mentors_app = make_mentors_app(
    mentor_client,
    label=MAIN_MENTOR_LABEL,
    route="/mentors",
    title="Mentors",
)
additional_mentors_app = make_mentors_app(
    mentor_client,
    label=ADDITIONAL_MENTOR_LABEL,
    route="/additional-mentors",
    title="Additional mentors",
    newest_first=True,
)
mentor_display_app = make_mentor_display_app(mentor_client)
founder_display_app = make_founder_display_app(founder_client)
companies_app = make_companies_app(company_client)
company_display_app = make_company_display_app(company_client, founder_client)

gr.mount_gradio_app(app, mentors_app, "/mentors")
gr.mount_gradio_app(app, additional_mentors_app, "/additional-mentors")
gr.mount_gradio_app(app, mentor_display_app, "/mentor-display")
gr.mount_gradio_app(app, founder_display_app, "/founder-display")
gr.mount_gradio_app(app, companies_app, "/companies")
gr.mount_gradio_app(app, company_display_app, "/company-display")
