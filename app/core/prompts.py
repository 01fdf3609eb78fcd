from app.core.exceptions import InvalidInputError

# Literal schema the model must fill in. {company} is the only placeholder; the
# JSON braces are doubled for str.format.
PREP_GUIDE_SCHEMA_TEMPLATE = """{{
  "companyName": "{company}",
  "interviewQuestions": {{
    "title": "Recent Internet-Based Interview Questions",
    "questions": [
      {{ "question": "...", "topic": "Data Structures", "difficulty": "Medium" }},
      {{ "question": "...", "topic": "System Design", "difficulty": "Hard" }},
      {{ "question": "...", "topic": "Behavioral", "difficulty": "Easy" }}
    ]
  }},
  "codingRound": {{
    "title": "Coding Round Analysis",
    "difficultyAnalysis": "Overall, the coding rounds are considered [Easy/Medium/Hard]...",
    "sampleProblems": [
      {{
        "problem": "Sample coding problem title...",
        "description": "Detailed description of the problem.",
        "solution": {{
          "python": "...",
          "java": "..."
        }}
      }}
    ]
  }},
  "roleInsights": {{
    "title": "Role Insights (Software Engineer)",
    "skillsRequired": ["Skill 1", "Skill 2", "..."],
    "hiringPattern": "Typically consists of X rounds including...",
    "numberOfRounds": "E.g., 3-5 rounds"
  }},
  "sampleAnswers": {{
    "title": "Sample HR Round Answers",
    "answers": [
      {{ "question": "Tell me about yourself.", "answer": "..." }},
      {{ "question": "What are your strengths and weaknesses?", "answer": "..." }},
      {{ "question": "Why should we hire you at {company}?", "answer": "..." }}
    ]
  }},
  "studyPlan": {{
    "title": "Customized 14-Day Study Plan",
    "plan": [
      {{ "days": "Day 1-3", "topic": "Arrays & Strings", "details": "Focus on common problems like two-pointers, sliding window..." }},
      {{ "days": "Day 4-6", "topic": "Trees & Graphs", "details": "Practice BFS, DFS, and common traversal algorithms." }},
      {{ "days": "Day 7-9", "topic": "Dynamic Programming", "details": "Start with classic problems like Fibonacci, Knapsack..." }},
      {{ "days": "Day 10-12", "topic": "System Design", "details": "Study concepts like load balancing, caching, databases." }},
      {{ "days": "Day 13-14", "topic": "Mock Interviews & Behavioral Prep", "details": "Practice with a peer, refine your stories for behavioral questions." }}
    ]
  }},
  "salaryRange": {{
    "title": "Expected Salary Range (India, SDE-1)",
    "entryLevel": "₹X - ₹Y LPA",
    "midLevel": "₹Y - ₹Z LPA",
    "freshers": "₹A - ₹B LPA",
    "note": "Salary ranges are estimates based on recent data and can vary based on location, role, and individual experience."
  }}
}}"""


def validate_company_name(company_name: str) -> str:
    """
    Reject empty or whitespace-only company names.

    Returns:
        The company name unchanged.

    Raises:
        InvalidInputError: If nothing but whitespace was entered.
    """
    if not isinstance(company_name, str) or not company_name.strip():
        raise InvalidInputError("Please enter a company name.")
    return company_name


def generate_prep_guide_prompt(company_name: str) -> str:
    """
    Generate the prompt for a complete interview preparation guide.

    The company name is embedded verbatim, both in the instructions and in the
    inline JSON template the model has to fill in.

    Args:
        company_name: The target company, e.g. "Google".

    Returns:
        The formatted prompt string.

    Raises:
        InvalidInputError: If the company name is empty or whitespace only.
    """
    validate_company_name(company_name)
    schema = PREP_GUIDE_SCHEMA_TEMPLATE.format(company=company_name)

    return (
        "You are an expert AI Job Interview Preparation Agent. Your task is to generate a "
        f"comprehensive interview preparation guide for the company: \"{company_name}\".\n\n"
        "Use the Google Search tool to find the most recent and relevant information available "
        "on the internet about interview processes, typical questions, salary data, and company "
        f"culture for \"{company_name}\".\n\n"
        "Please provide the output as a single, valid JSON object. Do not include any text or "
        "markdown formatting like ```json before or after the JSON object. The JSON object should "
        "strictly adhere to the following structure:\n\n"
        f"{schema}\n"
    )
