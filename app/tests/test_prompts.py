import pytest

from app.core.exceptions import InvalidInputError
from app.core.prompts import generate_prep_guide_prompt, validate_company_name

TOP_LEVEL_FIELDS = [
    "companyName",
    "interviewQuestions",
    "codingRound",
    "roleInsights",
    "sampleAnswers",
    "studyPlan",
    "salaryRange",
]


def test_prompt_for_google_names_company_and_study_plan() -> None:
    prompt = generate_prep_guide_prompt("Google")
    assert "Google" in prompt
    assert "studyPlan" in prompt


@pytest.mark.parametrize("company", ["Google", "Tata Consultancy Services", "AT&T", "Zoho {Chennai}", "Société Générale"])
def test_prompt_embeds_company_verbatim_and_every_section(company: str) -> None:
    prompt = generate_prep_guide_prompt(company)

    assert f'"companyName": "{company}"' in prompt
    assert f"Why should we hire you at {company}?" in prompt
    for field in TOP_LEVEL_FIELDS:
        assert f'"{field}"' in prompt


def test_prompt_asks_for_search_and_bare_json() -> None:
    prompt = generate_prep_guide_prompt("Infosys")
    assert "Google Search tool" in prompt
    assert "single, valid JSON object" in prompt
    assert "Do not include any text or markdown formatting" in prompt


def test_prompt_is_deterministic() -> None:
    assert generate_prep_guide_prompt("TCS") == generate_prep_guide_prompt("TCS")


@pytest.mark.parametrize("company", ["", "   ", "\n\t"])
def test_blank_company_name_is_rejected(company: str) -> None:
    with pytest.raises(InvalidInputError):
        generate_prep_guide_prompt(company)


def test_validate_company_name_returns_input_unchanged() -> None:
    assert validate_company_name("  Amazon ") == "  Amazon "
