from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List
import logging

from app.schemas.interview import PrepGuide

logger = logging.getLogger(__name__)

RULE = "=" * 50

# Display names for solution keys; unlisted keys are shown as written
LANGUAGE_LABELS = {
    "python": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "csharp": "C#",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "go": "Go",
    "kotlin": "Kotlin",
}


class BlockKind(str, Enum):
    TITLE = "title"
    HEADING = "heading"
    SUBHEADING = "subheading"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    LABELLED = "labelled"
    CODE = "code"
    NOTE = "note"


@dataclass(frozen=True)
class ReportBlock:
    kind: BlockKind
    text: str
    label: str = ""


@dataclass
class RenderedReport:
    """A prep guide laid out as an ordered list of display blocks."""
    company_name: str
    blocks: List[ReportBlock] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)

    def add(self, kind: BlockKind, text: str, label: str = "") -> None:
        self.blocks.append(ReportBlock(kind=kind, text=text, label=label))


class ReportGenerator:
    """
    Service responsible for turning a validated prep guide into a report.
    Handles only layout; the guide is trusted to be schema-valid already.
    """

    @staticmethod
    def render(guide: PrepGuide) -> RenderedReport:
        """
        Lay out the guide in page order: questions, coding round, role
        insights, HR answers, study plan, salary.
        """
        report = RenderedReport(company_name=guide.company_name)
        report.add(BlockKind.TITLE, f"{guide.company_name} Interview Prep Guide")

        questions = guide.interview_questions
        report.add(BlockKind.HEADING, questions.title)
        for q in questions.questions:
            report.add(BlockKind.BULLET, q.question)
            report.add(BlockKind.NOTE, f"Topic: {q.topic} | Difficulty: {q.difficulty}")

        coding = guide.coding_round
        report.add(BlockKind.HEADING, coding.title)
        report.add(BlockKind.PARAGRAPH, coding.difficulty_analysis)
        for problem in coding.sample_problems:
            report.add(BlockKind.SUBHEADING, problem.problem)
            report.add(BlockKind.PARAGRAPH, problem.description)
            for language, code in problem.solution.languages().items():
                report.add(BlockKind.CODE, code, label=LANGUAGE_LABELS.get(language.lower(), language))

        insights = guide.role_insights
        report.add(BlockKind.HEADING, insights.title)
        report.add(BlockKind.LABELLED, f"{insights.hiring_pattern} ({insights.number_of_rounds})", label="Hiring Pattern")
        report.add(BlockKind.SUBHEADING, "Required Skills")
        for skill in insights.skills_required:
            report.add(BlockKind.BULLET, skill)

        answers = guide.sample_answers
        report.add(BlockKind.HEADING, answers.title)
        for a in answers.answers:
            report.add(BlockKind.SUBHEADING, a.question)
            report.add(BlockKind.PARAGRAPH, a.answer)

        plan = guide.study_plan
        report.add(BlockKind.HEADING, plan.title)
        for day in plan.plan:
            report.add(BlockKind.LABELLED, f"{day.topic}: {day.details}", label=day.days)

        salary = guide.salary_range
        report.add(BlockKind.HEADING, salary.title)
        report.add(BlockKind.LABELLED, salary.freshers, label="Freshers")
        report.add(BlockKind.LABELLED, salary.entry_level, label="Entry-Level (1-2 YOE)")
        report.add(BlockKind.LABELLED, salary.mid_level, label="Mid-Level (3-5 YOE)")
        report.add(BlockKind.NOTE, salary.note)

        logger.debug(f"Rendered {len(report.blocks)} blocks for '{guide.company_name}'")
        return report

    @staticmethod
    def generate_txt_report(report: RenderedReport) -> str:
        """
        Generate a human-readable text report from a rendered guide.

        Args:
            report: Output of ReportGenerator.render.

        Returns:
            Formatted string content of the report.
        """
        lines = []
        for block in report.blocks:
            if block.kind is BlockKind.TITLE:
                lines.append(block.text.upper())
                lines.append(RULE)
                lines.append(f"Generated on: {report.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
                lines.append(RULE)
            elif block.kind is BlockKind.HEADING:
                lines.append("")
                lines.append(block.text.upper())
                lines.append("-" * len(block.text))
            elif block.kind is BlockKind.SUBHEADING:
                lines.append("")
                lines.append(block.text)
            elif block.kind is BlockKind.BULLET:
                lines.append(f"- {block.text}")
            elif block.kind is BlockKind.LABELLED:
                lines.append(f"{block.label}: {block.text}")
            elif block.kind is BlockKind.CODE:
                lines.append(f"[{block.label}]")
                lines.extend(f"    {line}" for line in block.text.splitlines())
            elif block.kind is BlockKind.NOTE:
                lines.append(f"  ({block.text})")
            else:
                lines.append(block.text)

        lines.append("")
        lines.append(RULE)
        return "\n".join(lines) + "\n"
