from __future__ import annotations

import logging

import gradio as gr

from src.airtable_client import AirtableError
from src.companies_service import fetch_company_founders
from src.css.utils import load_css
from src.page_timing import timed_page_load
from src.pages.cards import query_param, render_message
from src.pages.company_display.core_company_display import (
    load_company,
    render_company_header,
    render_founders_list,
    save_company_asks,
)
from src.pages.detail import render_back_link, render_missing, render_selection_prompt
from src.pages.header import render_header, with_light_mode_head
from src.records import Company

logger = logging.getLogger(__name__)

PAGE_ROUTE = "/company-display"
BACK_LINK = render_back_link("Back to companies", "/companies/")


def make_company_display_app(company_client, founder_client) -> gr.Blocks:
    def header_company_display(request: gr.Request):
        return render_header(path=PAGE_ROUTE, request=request)

    def _empty(detail_html: str):
        return None, detail_html, gr.update(visible=False), "", "", ""

    def load_company_display_page(request: gr.Request):
        slug = query_param(request, "slug").lower()
        if not slug:
            return _empty(render_selection_prompt("Company", "Companies", "/companies/"))
        try:
            company = load_company(company_client, slug)
        except AirtableError as exc:
            logger.exception("Failed to load company %r: %s", slug, exc)
            return _empty(render_message("Failed to load company details. Please try again later.", error=True))
        if company is None:
            return _empty(render_missing("Company", slug))

        founders, notice = fetch_company_founders(company, founder_client)
        return (
            company,
            render_company_header(company),
            gr.update(visible=True),
            company.introductions_needed,
            company.specific_support,
            render_founders_list(founders, notice),
        )

    def save_asks(company: Company | None, introductions: str, support: str):
        if company is None:
            return company, gr.update(), render_message("No company loaded.", error=True)
        try:
            updated, changed = save_company_asks(company_client, company, introductions, support)
        except AirtableError as exc:
            logger.exception("Failed to update asks for %s: %s", company.id, exc)
            return company, gr.update(), render_message("Failed to update company asks. Please try again.", error=True)
        message = "Company asks updated successfully" if changed else "No changes to save"
        return updated, render_company_header(updated), render_message(message)

    with gr.Blocks(
        title="Company",
        css=load_css("lookbook.css") or None,
        head=with_light_mode_head(None),
    ) as app:
        hdr = gr.HTML()

        with gr.Column(elem_id="lookbook-shell"):
            gr.HTML(BACK_LINK)
            detail_html = gr.HTML(elem_id="company-detail")

            with gr.Accordion("Edit asks", open=False, visible=False, elem_id="company-asks-editor") as asks_shell:
                introductions_input = gr.Textbox(label="Introductions to", lines=3, interactive=True)
                support_input = gr.Textbox(label="Specific support with", lines=3, interactive=True)
                save_btn = gr.Button("Save", variant="primary", scale=0, min_width=120)
                asks_status = gr.HTML()

            founders_html = gr.HTML(elem_id="company-founders")
            company_state = gr.State(None)

        app.load(timed_page_load(PAGE_ROUTE, header_company_display), outputs=[hdr])
        app.load(
            timed_page_load(PAGE_ROUTE, load_company_display_page),
            outputs=[
                company_state,
                detail_html,
                asks_shell,
                introductions_input,
                support_input,
                founders_html,
            ],
        )
        save_btn.click(
            timed_page_load(PAGE_ROUTE, save_asks),
            inputs=[company_state, introductions_input, support_input],
            outputs=[company_state, detail_html, asks_status],
        )

    return app
