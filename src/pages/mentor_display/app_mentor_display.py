from __future__ import annotations

import html
import logging

import gradio as gr

from src.airtable_client import AirtableError
from src.css.utils import load_css
from src.feedback import FEEDBACK_COMPANIES, FEEDBACK_SUFFIXES, FeedbackState
from src.page_timing import timed_page_load
from src.pages.cards import query_param, render_message
from src.pages.detail import render_back_link, render_missing, render_selection_prompt
from src.pages.header import render_header, with_light_mode_head
from src.pages.mentor_display.core_mentor_display import (
    FEEDBACK_KEYS,
    feedback_button_label,
    feedback_button_labels,
    feedback_enabled,
    load_mentor,
    render_mentor_detail,
    submit_feedback,
)
from src.records import ADDITIONAL_MENTOR_LABEL, Mentor

logger = logging.getLogger(__name__)

PAGE_ROUTE = "/mentor-display"


def _back_link(mentor: Mentor | None) -> str:
    if mentor is not None and mentor.lookbook_label == ADDITIONAL_MENTOR_LABEL:
        return render_back_link("Back to additional mentors", "/additional-mentors/")
    return render_back_link("Back to all mentors", "/mentors/")


def make_mentor_display_app(client) -> gr.Blocks:
    def header_mentor_display(request: gr.Request):
        return render_header(path=PAGE_ROUTE, request=request)

    def load_mentor_display_page(request: gr.Request):
        slug = query_param(request, "slug").lower()
        reset_buttons = [gr.update(value=label) for label in feedback_button_labels(FeedbackState())]
        if not slug:
            return (
                None,
                FeedbackState(),
                _back_link(None),
                render_selection_prompt("Mentor", "Mentors", "/mentors/"),
                gr.update(visible=False),
                "",
                *reset_buttons,
            )
        try:
            mentor = load_mentor(client, slug)
        except AirtableError as exc:
            logger.exception("Failed to load mentor %r: %s", slug, exc)
            return (
                None,
                FeedbackState(),
                _back_link(None),
                render_message("Failed to load mentor details. Please try again later.", error=True),
                gr.update(visible=False),
                "",
                *reset_buttons,
            )
        if mentor is None:
            return (
                None,
                FeedbackState(),
                _back_link(None),
                render_missing("Mentor", slug),
                gr.update(visible=False),
                "",
                *reset_buttons,
            )
        return (
            mentor,
            FeedbackState(),
            _back_link(mentor),
            render_mentor_detail(mentor),
            gr.update(visible=feedback_enabled(mentor)),
            "",
            *reset_buttons,
        )

    def make_feedback_handler(company: str, feedback_type: str):
        def toggle_mentor_feedback(mentor: Mentor | None, state: FeedbackState | None):
            state = state or FeedbackState()
            if mentor is None:
                return (
                    *[gr.update()] * len(FEEDBACK_KEYS),
                    state,
                    render_message("No mentor loaded.", error=True),
                )
            try:
                message = submit_feedback(client, mentor, state, company, feedback_type)
            except AirtableError as exc:
                logger.exception(
                    "Error submitting feedback %s/%s for %s: %s (details=%s)",
                    company,
                    feedback_type,
                    mentor.id,
                    exc,
                    getattr(exc, "details", None),
                )
                return (
                    *[gr.update()] * len(FEEDBACK_KEYS),
                    state,
                    render_message("Failed to submit feedback. Please try again.", error=True),
                )
            return (
                *[gr.update(value=label) for label in feedback_button_labels(state)],
                state,
                f"<div class='lookbook-empty'>{html.escape(message)}</div>",
            )

        return toggle_mentor_feedback

    with gr.Blocks(
        title="Mentor",
        css=load_css("lookbook.css") or None,
        head=with_light_mode_head(None),
    ) as app:
        hdr = gr.HTML()

        with gr.Column(elem_id="lookbook-shell"):
            back_html = gr.HTML()
            detail_html = gr.HTML(elem_id="mentor-detail")

            with gr.Column(visible=False, elem_id="mentor-feedback") as feedback_shell:
                gr.HTML("<h3>Feedback</h3>")
                buttons = {}
                for company in FEEDBACK_COMPANIES:
                    with gr.Row(elem_classes=["feedback-company"]):
                        gr.HTML(f"<strong>{html.escape(company)}</strong>")
                        for feedback_type in FEEDBACK_SUFFIXES:
                            buttons[(company, feedback_type)] = gr.Button(
                                feedback_button_label(feedback_type, False),
                                size="sm",
                                scale=0,
                                min_width=90,
                            )
                feedback_status = gr.HTML()
                button_outputs = [buttons[key] for key in FEEDBACK_KEYS]

            mentor_state = gr.State(None)
            feedback_state = gr.State(FeedbackState())

        app.load(timed_page_load(PAGE_ROUTE, header_mentor_display), outputs=[hdr])
        app.load(
            timed_page_load(PAGE_ROUTE, load_mentor_display_page),
            outputs=[
                mentor_state,
                feedback_state,
                back_html,
                detail_html,
                feedback_shell,
                feedback_status,
                *button_outputs,
            ],
        )

        for (company, feedback_type), button in buttons.items():
            button.click(
                timed_page_load(
                    PAGE_ROUTE,
                    make_feedback_handler(company, feedback_type),
                    label=f"toggle_feedback.{company}.{feedback_type}",
                ),
                inputs=[mentor_state, feedback_state],
                outputs=[*button_outputs, feedback_state, feedback_status],
                concurrency_limit=1,
            )

    return app
