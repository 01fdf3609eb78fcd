from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional

# --- Shared/Base Models ---

class WireModel(BaseModel):
    """
    Base model for the prep guide wire format.

    Field names are snake_case in Python and camelCase on the wire. Only the
    camelCase names are accepted on input, and validation is strict: the
    generator's output is never coerced into shape.
    """
    model_config = ConfigDict(
        strict=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class TitledSection(WireModel):
    """Base model for every report section that carries a display title."""
    title: str = Field(..., description="Section heading shown in the report.")

# --- Prep Guide Models ---

class InterviewQuestion(WireModel):
    question: str
    topic: str = Field(..., description="e.g. 'Data Structures', 'System Design', 'Behavioral'.")
    difficulty: str = Field(..., description="Open enumeration; Easy, Medium and Hard are the usual values.")


class InterviewQuestionsSection(TitledSection):
    questions: list[InterviewQuestion] = Field(..., min_length=1)


class Solution(WireModel):
    """Language name -> source code. python and java are always present."""
    model_config = ConfigDict(extra="allow")

    __pydantic_extra__: Dict[str, str]

    python: str
    java: str

    def languages(self) -> Dict[str, str]:
        """All solutions in display order: python, java, then any extras."""
        return {"python": self.python, "java": self.java, **(self.model_extra or {})}


class SampleProblem(WireModel):
    problem: str
    description: str
    solution: Solution


class CodingRoundSection(TitledSection):
    difficulty_analysis: str
    sample_problems: list[SampleProblem] = Field(..., min_length=1)


class RoleInsightsSection(TitledSection):
    skills_required: list[str] = Field(..., min_length=1)
    hiring_pattern: str
    number_of_rounds: str


class SampleAnswer(WireModel):
    question: str
    answer: str


class SampleAnswersSection(TitledSection):
    answers: list[SampleAnswer] = Field(..., min_length=1)


class StudyDay(WireModel):
    days: str = Field(..., description="Day range, e.g. 'Day 1-3'.")
    topic: str
    details: str


class StudyPlanSection(TitledSection):
    plan: list[StudyDay] = Field(..., min_length=1)


class SalaryRangeSection(TitledSection):
    entry_level: str
    mid_level: str
    freshers: str
    note: str


class PrepGuide(WireModel):
    """
    A validated interview preparation guide for one company.

    Created per request and handed to the report renderer; never persisted.
    """
    company_name: str = Field(..., min_length=1)
    interview_questions: InterviewQuestionsSection
    coding_round: CodingRoundSection
    role_insights: RoleInsightsSection
    sample_answers: SampleAnswersSection
    study_plan: StudyPlanSection
    salary_range: SalaryRangeSection

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the camelCase JSON shape the generator produced."""
        return self.model_dump(by_alias=True)

# --- API Models ---

class GroundingSource(BaseModel):
    """A web page Google Search grounding used while generating the guide."""
    uri: str
    title: str = ""


class PrepGuideRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str = Field(..., description="Company to prepare for, e.g. 'Google'.")
    client_id: Optional[str] = Field(default=None, description="Browser session id used to refuse duplicate submissions.")


class PrepGuideResponse(BaseModel):
    guide: PrepGuide
    sources: list[GroundingSource] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "guide": self.guide.to_wire(),
            "sources": [source.model_dump() for source in self.sources],
        }


class ExportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    guide: PrepGuide
    client_id: Optional[str] = None
