from typing import Annotated, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Mode = Literal["individual", "business"]
MODES: Tuple[str, ...] = ("individual", "business")

CATEGORIES: Tuple[str, ...] = ("strengths", "weaknesses", "opportunities", "threats")


class _ProfileBase(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    content: str = ""

    @classmethod
    def field_names(cls) -> List[str]:
        return [name for name in cls.model_fields if name != "mode"]

    def context_fields(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.field_names() if name != "content"}


class IndividualProfile(_ProfileBase):
    mode: Literal["individual"] = "individual"
    role: str = ""
    seniority: str = ""
    industry: str = ""
    market: str = ""
    career_goal: str = ""


class BusinessProfile(_ProfileBase):
    mode: Literal["business"] = "business"
    company: str = ""
    product_service: str = ""
    industry: str = ""
    market_region: str = ""
    customer_segment: str = ""
    value_proposition: str = ""
    website: str = ""


Profile = Annotated[Union[IndividualProfile, BusinessProfile], Field(discriminator="mode")]

PROFILE_TYPES = {
    "individual": IndividualProfile,
    "business": BusinessProfile,
}


def empty_profile(mode: str) -> _ProfileBase:
    try:
        return PROFILE_TYPES[mode]()
    except KeyError:
        raise ValueError(f"Unknown mode: {mode!r}") from None


class AnalysisResult(BaseModel):
    """Validated SWOT payload. Items are kept verbatim and in model order."""

    model_config = ConfigDict(extra="ignore")

    summary: str
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]

    def items_for(self, category: str) -> List[str]:
        if category not in CATEGORIES:
            raise KeyError(category)
        return getattr(self, category)


# Gemini responseSchema (OpenAPI subset, upper-case type names).
RESPONSE_SCHEMA: Dict = {
    "type": "OBJECT",
    "properties": {
        "strengths": {"type": "ARRAY", "items": {"type": "STRING"}},
        "weaknesses": {"type": "ARRAY", "items": {"type": "STRING"}},
        "opportunities": {"type": "ARRAY", "items": {"type": "STRING"}},
        "threats": {"type": "ARRAY", "items": {"type": "STRING"}},
        "summary": {"type": "STRING"},
    },
    "required": ["strengths", "weaknesses", "opportunities", "threats", "summary"],
}
