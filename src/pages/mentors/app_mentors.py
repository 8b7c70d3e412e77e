from __future__ import annotations

import html
import logging
import time
from typing import List, Sequence

import gradio as gr

from src.airtable_client import AirtableError
from src.css.utils import load_css
from src.page_timing import log_timing, timed_page_load
from src.pages.cards import render_message
from src.pages.header import render_header, with_light_mode_head
from src.pages.mentors.core_mentors import (
    DATE_FILTER_ALL_OPTION,
    load_mentor_listing,
    render_mentor_listing,
)
from src.records import MAIN_MENTOR_LABEL, Mentor

logger = logging.getLogger(__name__)


def make_mentors_app(
    client,
    *,
    label: str = MAIN_MENTOR_LABEL,
    route: str = "/mentors",
    title: str = "Mentors",
    newest_first: bool = False,
) -> gr.Blocks:
    """One listing page per mentor label; `/mentors` and `/additional-mentors` share this factory."""
    title_html = f"<h2>{html.escape(title)}</h2>"

    def header_mentors(request: gr.Request):
        return render_header(path=route, request=request)

    def load_mentors_page(request: gr.Request):
        total_start = time.perf_counter()
        try:
            mentors, date_choices, tag_choices = load_mentor_listing(
                client,
                label,
                newest_first=newest_first,
            )
        except AirtableError as exc:
            logger.exception("Failed to load %s page: %s", route, exc)
            log_timing("mentors.page", "load_mentors_page.error", total_start, route=route)
            return (
                [],
                gr.update(choices=[DATE_FILTER_ALL_OPTION], value=DATE_FILTER_ALL_OPTION),
                gr.update(choices=[], value=[]),
                render_message(f"Error loading mentors: {exc}", error=True),
            )

        cards_html = render_mentor_listing(mentors)
        log_timing("mentors.page", "load_mentors_page.total", total_start, route=route, mentors=len(mentors))
        return (
            mentors,
            gr.update(choices=date_choices, value=DATE_FILTER_ALL_OPTION),
            gr.update(choices=tag_choices, value=[]),
            cards_html,
        )

    def update_mentor_cards(
        mentors: List[Mentor] | None,
        selected_date: str | None,
        selected_tags: Sequence[str] | None,
    ):
        return render_mentor_listing(mentors or [], selected_date, selected_tags)

    def clear_mentor_filters(mentors: List[Mentor] | None):
        return (
            gr.update(value=DATE_FILTER_ALL_OPTION),
            gr.update(value=[]),
            render_mentor_listing(mentors or []),
        )

    with gr.Blocks(
        title=title,
        css=load_css("lookbook.css") or None,
        head=with_light_mode_head(None),
    ) as app:
        hdr = gr.HTML()

        with gr.Column(elem_id="lookbook-shell"):
            gr.HTML(title_html, elem_id="lookbook-title")
            with gr.Row(elem_id="lookbook-filter-row"):
                date_filter = gr.Dropdown(
                    label="Date",
                    choices=[DATE_FILTER_ALL_OPTION],
                    value=DATE_FILTER_ALL_OPTION,
                    interactive=True,
                    scale=1,
                    elem_id="lookbook-date-filter",
                )
                tag_filter = gr.CheckboxGroup(
                    label="Tags",
                    choices=[],
                    value=[],
                    interactive=True,
                    scale=2,
                    elem_id="lookbook-tag-filter",
                )
                clear_btn = gr.Button("Clear filters", variant="secondary", scale=0, min_width=140)

            mentors_state = gr.State([])
            cards_html = gr.HTML(elem_id="lookbook-cards")

        app.load(timed_page_load(route, header_mentors), outputs=[hdr])
        app.load(
            timed_page_load(route, load_mentors_page),
            outputs=[mentors_state, date_filter, tag_filter, cards_html],
        )

        filter_inputs = [mentors_state, date_filter, tag_filter]
        date_filter.input(
            timed_page_load(route, update_mentor_cards, label="update_mentor_cards.date"),
            inputs=filter_inputs,
            outputs=[cards_html],
            show_progress=False,
        )
        tag_filter.input(
            timed_page_load(route, update_mentor_cards, label="update_mentor_cards.tags"),
            inputs=filter_inputs,
            outputs=[cards_html],
            show_progress=False,
        )
        clear_btn.click(
            timed_page_load(route, clear_mentor_filters),
            inputs=[mentors_state],
            outputs=[date_filter, tag_filter, cards_html],
            show_progress=False,
        )

    return app
