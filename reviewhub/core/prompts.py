"""
Centralized AI Prompt Repository
- Keeps the report contract (field names, value ranges) in one place
- Decouples prompts from business logic
"""

from typing import List

# --- PERFORMANCE REPORT PROMPTS ---
PERFORMANCE_REPORT_SYSTEM = (
    "You are an HR analyst that turns peer feedback into a monthly performance report. "
    "Be constructive, specific and professional. Base every statement on the feedback provided. "
    "CRITICAL: You must respond with a single valid JSON object only. Do not wrap it in markdown code blocks."
)

PERFORMANCE_REPORT_USER_TEMPLATE = """You are analyzing performance feedback for {employee_name}, who works as a {employee_role}.

Feedback points from colleagues:
{feedback}

Based on the feedback, generate a performance report with:
1. A numerical ranking from 0-10 (with 10 being excellent)
2. A list of areas for improvement
3. A list of strengths/qualities
4. A brief summary of overall performance

Format your response as a JSON object with exactly this structure:
{{
  "ranking": number,
  "improvements": [string array],
  "qualities": [string array],
  "summary": string
}}"""


def format_feedback(review_contents: List[str]) -> str:
    return "\n".join(f'{i}. "{content}"' for i, content in enumerate(review_contents, start=1))


# helper to build prompts
def get_prompt(template: str, **kwargs) -> str:
    return template.format(**kwargs)
