from __future__ import annotations

import logging
import time

import gradio as gr

from src.airtable_client import AirtableError
from src.companies_service import fetch_companies
from src.css.utils import load_css
from src.page_timing import log_timing, timed_page_load
from src.pages.cards import render_company_cards, render_message
from src.pages.header import render_header, with_light_mode_head

logger = logging.getLogger(__name__)

PAGE_ROUTE = "/companies"


def make_companies_app(client) -> gr.Blocks:
    def header_companies(request: gr.Request):
        return render_header(path=PAGE_ROUTE, request=request)

    def load_companies_page(request: gr.Request):
        start = time.perf_counter()
        try:
            companies = fetch_companies(client)
        except AirtableError as exc:
            logger.exception("Failed to load companies: %s", exc)
            return render_message(f"Error loading companies: {exc}", error=True)
        cards_html = render_company_cards(companies)
        log_timing("companies.page", "load_companies_page.total", start, companies=len(companies))
        return cards_html

    with gr.Blocks(
        title="Companies",
        css=load_css("lookbook.css") or None,
        head=with_light_mode_head(None),
    ) as app:
        hdr = gr.HTML()
        with gr.Column(elem_id="lookbook-shell"):
            gr.HTML("<h2>Companies</h2>", elem_id="lookbook-title")
            cards_html = gr.HTML(elem_id="company-cards")

        app.load(timed_page_load(PAGE_ROUTE, header_companies), outputs=[hdr])
        app.load(timed_page_load(PAGE_ROUTE, load_companies_page), outputs=[cards_html])

    return app
