from __future__ import annotations

import logging

import gradio as gr

from src.airtable_client import AirtableError
from src.css.utils import load_css
from src.page_timing import timed_page_load
from src.pages.cards import query_param, render_message
from src.pages.detail import render_back_link, render_missing, render_selection_prompt
from src.pages.founder_display.core_founder_display import (
    load_founder,
    render_founder_detail,
    save_lookbook_bio,
)
from src.pages.header import render_header, with_light_mode_head
from src.records import Founder

logger = logging.getLogger(__name__)

PAGE_ROUTE = "/founder-display"
BACK_LINK = render_back_link("Back to companies", "/companies/")


def make_founder_display_app(client) -> gr.Blocks:
    def header_founder_display(request: gr.Request):
        return render_header(path=PAGE_ROUTE, request=request)

    def _empty(detail_html: str):
        return None, detail_html, gr.update(visible=False), gr.update(value=""), ""

    def load_founder_display_page(request: gr.Request):
        slug = query_param(request, "slug").lower()
        if not slug:
            return _empty(render_selection_prompt("Founder", "Companies", "/companies/"))
        try:
            founder = load_founder(client, slug)
        except AirtableError as exc:
            logger.exception("Failed to load founder %r: %s", slug, exc)
            return _empty(render_message("Failed to load founder details. Please try again later.", error=True))
        if founder is None:
            return _empty(render_missing("Founder", slug))
        return (
            founder,
            render_founder_detail(founder),
            gr.update(visible=True),
            gr.update(value=founder.lookbook_bio),
            "",
        )

    def save_founder_bio(founder: Founder | None, bio: str):
        if founder is None:
            return founder, render_message("No founder loaded.", error=True)
        try:
            updated = save_lookbook_bio(client, founder, bio)
        except AirtableError as exc:
            logger.exception("Failed to update lookbook bio for %r: %s", founder.name, exc)
            return founder, render_message("Failed to update bio. Please try again.", error=True)
        return updated, render_message("Bio updated successfully")

    def reset_founder_bio(founder: Founder | None):
        return gr.update(value=founder.lookbook_bio if founder else ""), ""

    with gr.Blocks(
        title="Founder",
        css=load_css("lookbook.css") or None,
        head=with_light_mode_head(None),
    ) as app:
        hdr = gr.HTML()

        with gr.Column(elem_id="lookbook-shell"):
            gr.HTML(BACK_LINK)
            detail_html = gr.HTML(elem_id="founder-detail")

            with gr.Column(visible=False, elem_id="founder-bio-editor") as bio_shell:
                bio_input = gr.Textbox(label="Lookbook bio", lines=5, interactive=True)
                with gr.Row():
                    save_btn = gr.Button("Save", variant="primary", scale=0, min_width=120)
                    cancel_btn = gr.Button("Cancel", variant="secondary", scale=0, min_width=120)
                bio_status = gr.HTML()

            founder_state = gr.State(None)

        app.load(timed_page_load(PAGE_ROUTE, header_founder_display), outputs=[hdr])
        app.load(
            timed_page_load(PAGE_ROUTE, load_founder_display_page),
            outputs=[founder_state, detail_html, bio_shell, bio_input, bio_status],
        )
        save_btn.click(
            timed_page_load(PAGE_ROUTE, save_founder_bio),
            inputs=[founder_state, bio_input],
            outputs=[founder_state, bio_status],
        )
        cancel_btn.click(
            timed_page_load(PAGE_ROUTE, reset_founder_bio),
            inputs=[founder_state],
            outputs=[bio_input, bio_status],
            show_progress=False,
        )

    return app
