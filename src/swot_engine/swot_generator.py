import logging
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from swot_engine.config import Settings
from swot_engine.errors import (
    ANALYSIS_FAILED_MESSAGE,
    NO_INPUT_MESSAGE,
    AnalysisError,
    InputError,
)
from swot_engine.schemas import CATEGORIES, RESPONSE_SCHEMA, AnalysisResult
from swot_engine.utils import safe_json_loads, sanitize_text

logger = logging.getLogger(__name__)

MIN_POINTS = 6
MAX_POINTS = 7
DEEP_POINTS = 2
CONTEXT_FIELD_MAX_CHARS = 200

Transport = Callable[..., str]


# ----------------------------
# LLM client abstraction
# ----------------------------
def _call_llm_gemini(**kwargs: Any) -> str:
    """
    Gemini call (single request, JSON response schema).

    The rest of the engine expects the raw JSON text of the first candidate.
    """

    # Keep the dependency + call isolated in a single module.
    from llm_gemini import generate_json

    return generate_json(**kwargs)


def _context_line(profile: Any) -> str:
    f = {k: sanitize_text(v, max_len=CONTEXT_FIELD_MAX_CHARS) for k, v in profile.context_fields().items()}
    if profile.mode == "individual":
        return f"Context: {f['role']} ({f['seniority']}) in {f['industry']}. Goal: {f['career_goal']}"
    return f"Context: {f['company']} in {f['industry']}. Value Prop: {f['value_proposition']}"


def build_system_instruction(profile: Any) -> str:
    return f"""
ROLE:
You are an expert strategic analyst.

TASK:
Perform a deep SWOT analysis of the provided input.

CONSTRAINTS:
- CRITICAL: Provide exactly {MIN_POINTS} to {MAX_POINTS} points per category (strengths, weaknesses, opportunities, threats).
- At least {DEEP_POINTS} points per category must be a "Very Deep Strategic Analysis" (detailed paragraph).
- The remaining points are concise, specific bullets tied to the input.
- summary: a short paragraph on the overall strategic position.

{_context_line(profile)}
""".strip()


def parse_analysis(raw: str) -> AnalysisResult:
    """Decode the model's JSON text and validate it. Any failure is an AnalysisError."""
    try:
        parsed = safe_json_loads(raw or "")
        return AnalysisResult.model_validate(parsed)
    except (ValueError, ValidationError) as e:
        raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e


def count_warnings(result: AnalysisResult) -> List[str]:
    # Counts are reported, never corrected.
    warnings: List[str] = []
    for q in CATEGORIES:
        n = len(result.items_for(q))
        if n < MIN_POINTS or n > MAX_POINTS:
            warnings.append(f"{q}: expected {MIN_POINTS}-{MAX_POINTS} points, received {n}.")
    return warnings


class AnalysisClient:
    """
    analyze(profile) -> AnalysisResult

    Includes:
      - empty-input short circuit (no request)
      - fixed system instruction with profile context
      - single Gemini request constrained to RESPONSE_SCHEMA
      - parse + validate with Pydantic
    No retry, no repair pass.
    """

    def __init__(self, settings: Settings, transport: Optional[Transport] = None) -> None:
        self._settings = settings
        self._transport = transport or _call_llm_gemini

    def analyze(self, profile: Any) -> AnalysisResult:
        content = (profile.content or "").strip()
        if not content:
            raise InputError(NO_INPUT_MESSAGE)

        if not self._settings.has_api_key:
            logger.warning("GEMINI_API_KEY is not set; analysis cannot run.")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE)

        system_instruction = build_system_instruction(profile)

        try:
            raw = self._transport(
                api_key=self._settings.GEMINI_API_KEY.strip(),
                system_instruction=system_instruction,
                content=content,
                response_schema=RESPONSE_SCHEMA,
                model=self._settings.GEMINI_MODEL,
                timeout_s=self._settings.GEMINI_TIMEOUT_S,
            )
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Gemini request failed: {type(e).__name__}: {e}")
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from e

        try:
            result = parse_analysis(raw)
        except AnalysisError:
            logger.warning("Gemini response is not a valid SWOT object.")
            raise

        for w in count_warnings(result):
            logger.warning(w)

        logger.info(
            f"SWOT analysis complete ({profile.mode}): "
            + ", ".join(f"{q}={len(result.items_for(q))}" for q in CATEGORIES)
        )
        return result
