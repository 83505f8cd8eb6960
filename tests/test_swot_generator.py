"""Tests for swot_engine.swot_generator."""
import json

import pytest

from swot_engine.config import Settings
from swot_engine.errors import AnalysisError, InputError
from swot_engine.schemas import RESPONSE_SCHEMA, BusinessProfile, IndividualProfile
from swot_engine.swot_generator import (
    AnalysisClient,
    build_system_instruction,
    count_warnings,
    parse_analysis,
)

from conftest import FakeTransport, make_payload


def _individual(content="Five years building data pipelines.") -> IndividualProfile:
    return IndividualProfile(
        role="Data Engineer",
        seniority="Senior",
        industry="Fintech",
        market="EU",
        career_goal="Move into platform leadership",
        content=content,
    )


@pytest.mark.parametrize("content", ["", "   ", "\n\t  \n"])
def test_blank_content_never_calls_transport(settings, content):
    transport = FakeTransport(make_payload())
    client = AnalysisClient(settings, transport=transport)

    with pytest.raises(InputError, match="Please provide text or upload a document"):
        client.analyze(_individual(content))
    assert transport.calls == []


def test_missing_api_key_fails_without_request():
    transport = FakeTransport(make_payload())
    client = AnalysisClient(Settings(GEMINI_API_KEY="  ", _env_file=None), transport=transport)

    with pytest.raises(AnalysisError, match="GEMINI_API_KEY"):
        client.analyze(_individual())
    assert transport.calls == []


def test_request_carries_instruction_content_and_schema(settings, payload):
    transport = FakeTransport(payload)
    client = AnalysisClient(settings, transport=transport)

    result = client.analyze(_individual("  Five years building data pipelines.\n"))

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["api_key"] == "test-key"
    assert call["model"] == "gemini-test"
    assert call["content"] == "Five years building data pipelines."
    assert call["response_schema"] == RESPONSE_SCHEMA
    assert "Five years building" not in call["system_instruction"]
    assert result.strengths == payload["strengths"]
    assert result.summary == payload["summary"]


def test_individual_instruction_context():
    text = build_system_instruction(_individual())
    assert "exactly 6 to 7 points per category" in text
    assert "Very Deep Strategic Analysis" in text
    assert "Context: Data Engineer (Senior) in Fintech. Goal: Move into platform leadership" in text


def test_business_instruction_context_is_sanitized():
    profile = BusinessProfile(
        company="<b>Acme</b>  GmbH",
        industry="Logistics",
        value_proposition="Same-day\nfreight matching",
        website="https://acme.example",
    )
    text = build_system_instruction(profile)
    assert "Context: Acme GmbH in Logistics. Value Prop: Same-day freight matching" in text
    assert "acme.example" not in text


def test_transport_failure_is_analysis_error(settings):
    client = AnalysisClient(settings, transport=FakeTransport(error=ConnectionError("503 upstream")))

    with pytest.raises(AnalysisError) as excinfo:
        client.analyze(_individual())
    assert "Analysis failed" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, ConnectionError)


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not json at all",
        '{"strengths": ["a"], "weaknesses": [',
        "[1, 2, 3]",
        json.dumps({"strengths": ["a"], "weaknesses": [], "opportunities": [], "threats": []}),
        json.dumps({**make_payload(), "threats": "just one string"}),
        json.dumps({**make_payload(), "summary": None}),
    ],
)
def test_malformed_payload_is_analysis_error(settings, raw):
    client = AnalysisClient(settings, transport=FakeTransport(raw))
    with pytest.raises(AnalysisError, match="Analysis failed"):
        client.analyze(_individual())


@pytest.mark.parametrize(
    "wrap",
    [
        lambda body: body + ' , "threats": ["dangling"',
        lambda body: "```json\n" + body + "\n```",
        lambda body: "Here is the analysis: " + body,
        lambda body: body + body,
    ],
)
def test_text_around_a_valid_object_is_rejected(wrap):
    with pytest.raises(AnalysisError, match="Analysis failed"):
        parse_analysis(wrap(json.dumps(make_payload())))


def test_parse_keeps_items_verbatim():
    payload = make_payload()
    payload["strengths"][0] = "  Deep analysis: {braces} and \"quotes\" kept.  "

    result = parse_analysis(json.dumps(payload))
    assert result.strengths == payload["strengths"]


def test_count_warnings_reports_without_correcting(settings):
    payload = make_payload(counts=(6, 5, 7, 9))
    result = AnalysisClient(settings, transport=FakeTransport(payload)).analyze(_individual())

    assert len(result.weaknesses) == 5
    assert len(result.threats) == 9
    assert count_warnings(result) == [
        "weaknesses: expected 6-7 points, received 5.",
        "threats: expected 6-7 points, received 9.",
    ]
