"""Tests for swot_engine.workflow."""
import json

from swot_engine.form_state import FormState
from swot_engine.schemas import AnalysisResult
from swot_engine.swot_generator import AnalysisClient
from swot_engine.workflow import handle_upload, run_analysis

from conftest import FakeTransport, make_payload


def test_upload_fills_active_content():
    state = FormState(mode="business")
    state.set_field("business", "content", "typed text")

    assert handle_upload(state, "portfolio.txt", b"Quarterly numbers") is True
    assert state.profile("business").content == "Quarterly numbers"
    assert state.profile("individual").content == ""
    assert state.upload.filename == "portfolio.txt"
    assert not state.parsing
    assert state.error is None


def test_failed_upload_sets_error_and_keeps_content():
    state = FormState()
    state.set_field("individual", "content", "typed text")

    assert handle_upload(state, "cv.pdf", b"x" * 20, max_bytes=10) is False
    assert "too large" in state.error
    assert state.active_profile.content == "typed text"
    assert not state.parsing


def test_blank_content_reports_error_without_request(settings):
    state = FormState()
    state.set_field("individual", "content", "   ")
    transport = FakeTransport(make_payload())

    assert run_analysis(state, AnalysisClient(settings, transport=transport)) is False
    assert state.error == "Please provide text or upload a document to analyze."
    assert transport.calls == []
    assert not state.loading


def test_successful_run_replaces_result(settings):
    state = FormState()
    state.set_field("individual", "content", "CV text")
    first = make_payload(summary="first")
    second = make_payload(summary="second")

    run_analysis(state, AnalysisClient(settings, transport=FakeTransport(first)))
    assert isinstance(state.result, AnalysisResult)
    assert state.result.summary == "first"

    assert run_analysis(state, AnalysisClient(settings, transport=FakeTransport(second))) is True
    assert state.result.summary == "second"
    assert not state.loading


def test_malformed_response_keeps_previous_result(settings):
    state = FormState()
    state.set_field("individual", "content", "CV text")
    run_analysis(state, AnalysisClient(settings, transport=FakeTransport(make_payload(summary="kept"))))

    assert run_analysis(state, AnalysisClient(settings, transport=FakeTransport("{not json"))) is False
    assert state.result.summary == "kept"
    assert state.error.startswith("Analysis failed.")
    assert not state.loading


def test_result_for_abandoned_mode_is_discarded(settings):
    state = FormState()
    state.set_field("individual", "content", "CV text")

    def switch_then_answer(**kwargs):
        state.switch_mode("business")
        return json.dumps(make_payload())

    assert run_analysis(state, AnalysisClient(settings, transport=switch_then_answer)) is False
    assert state.mode == "business"
    assert state.result is None
    assert state.error is None

