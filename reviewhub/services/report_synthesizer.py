import json
import logging
import re
from typing import Any, Dict, List

from reviewhub.core.exceptions import InvalidInputError, MalformedAIResponseError
from reviewhub.core.prompts import (
    PERFORMANCE_REPORT_SYSTEM,
    PERFORMANCE_REPORT_USER_TEMPLATE,
    format_feedback,
    get_prompt,
)
from reviewhub.schemas.report import ReportFields
from reviewhub.services.ai_orchestrator import AIOrchestrator

logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r"\{.*\}", re.DOTALL)


def build_report_messages(review_contents: List[str], employee_name: str, employee_role: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": PERFORMANCE_REPORT_SYSTEM},
        {
            "role": "user",
            "content": get_prompt(
                PERFORMANCE_REPORT_USER_TEMPLATE,
                employee_name=employee_name,
                employee_role=employee_role,
                feedback=format_feedback(review_contents),
            ),
        },
    ]


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but true/false is not a score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def parse_report_response(text: str) -> ReportFields:
    """
    Pull the outermost {...} block out of the model's text and check it holds
    exactly the report shape. Raises MalformedAIResponseError otherwise.
    """
    match = _JSON_BLOCK.search(text or "")
    if not match:
        raise MalformedAIResponseError("no JSON object found")

    try:
        payload = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise MalformedAIResponseError(f"invalid JSON ({e.msg})")

    if not isinstance(payload, dict):
        raise MalformedAIResponseError("top-level value is not an object")

    ranking = payload.get("ranking")
    if not _is_number(ranking):
        raise MalformedAIResponseError("'ranking' must be a number")
    if not 0 <= ranking <= 10:
        raise MalformedAIResponseError("'ranking' must be between 0 and 10")
    for field in ("improvements", "qualities"):
        if not _is_string_list(payload.get(field)):
            raise MalformedAIResponseError(f"'{field}' must be a list of strings")
    if not isinstance(payload.get("summary"), str):
        raise MalformedAIResponseError("'summary' must be a string")

    return ReportFields(
        ranking=float(ranking),
        improvements=payload["improvements"],
        qualities=payload["qualities"],
        summary=payload["summary"],
    )


def generate_performance_report(review_contents: List[str], employee_name: str, employee_role: str) -> ReportFields:
    """
    Turn one month of review text into report fields via the model.
    Model failures and malformed output propagate; nothing is retried here.
    """
    if not review_contents:
        raise InvalidInputError("At least one review is required to synthesize a report")

    messages = build_report_messages(review_contents, employee_name, employee_role)
    logger.info(f"Synthesizing report for {employee_name} from {len(review_contents)} review(s)")

    response = AIOrchestrator.call_model(messages)
    try:
        return parse_report_response(response)
    except MalformedAIResponseError:
        logger.error(f"Malformed AI response for {employee_name}: {response[:200] if response else response!r}")
        raise
