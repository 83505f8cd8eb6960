"""
User actions that touch the outside world: file upload and analysis.

Each action starts a ticket on the FormState, does its work, and reports the
outcome back through that ticket. SwotError messages land in the single error
slot; nothing is raised to the page.
"""
from __future__ import annotations

import logging
from typing import Optional

from swot_engine.errors import NO_INPUT_MESSAGE, SwotError
from swot_engine.extractor import extract
from swot_engine.form_state import FormState
from swot_engine.swot_generator import AnalysisClient

logger = logging.getLogger(__name__)


def handle_upload(
    state: FormState,
    filename: str,
    data: bytes,
    max_bytes: Optional[int] = None,
) -> bool:
    """Extract an uploaded file into the active profile's content. Returns True if applied."""
    ticket = state.begin_extraction(filename)
    try:
        text = extract(filename, data, max_bytes=max_bytes)
    except SwotError as e:
        logger.warning(f"Extraction of {filename!r} failed: {e.message}")
        state.fail_extraction(ticket, e.message)
        return False
    return state.finish_extraction(ticket, text)


def run_analysis(state: FormState, client: AnalysisClient) -> bool:
    """Analyse the active profile. Returns True if a new result was stored."""
    profile = state.active_profile
    if not profile.content.strip():
        state.report_error(NO_INPUT_MESSAGE)
        return False

    ticket = state.begin_analysis()
    try:
        result = client.analyze(profile)
    except SwotError as e:
        state.fail_analysis(ticket, e.message)
        return False
    return state.finish_analysis(ticket, result)
