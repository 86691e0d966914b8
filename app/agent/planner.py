"""
Plan chain: prompt → chat model → structured plan.

One LLM call, no tools. The reply is parsed against the Plan schema; any network or parse
failure propagates to the caller.
"""

import json
import logging
import re

from pydantic import ValidationError

from app.agent.llm import complete
from app.agent.prompts import OBJECTIVE, PLAN_PROMPT, format_today
from app.core.config import PLAN_TEMPERATURE
from app.core.errors import PlanParseError
from app.schemas.plan import Plan

logger = logging.getLogger(__name__)

# Abilities offered to the planner (name and arguments as the model should reference them)
PLAN_ABILITIES: list[str] = ["search_internet(query)", "send_tweet(text)"]

_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def format_instructions() -> str:
    """Tell the model to answer with a fenced JSON object matching the Plan schema."""
    schema = Plan.model_json_schema()
    schema.pop("title", None)
    schema.pop("examples", None)
    return (
        "You must format your output as a JSON value that adheres to the JSON Schema below.\n"
        "Do not include descriptions or schema keywords in the output, only the values.\n\n"
        "Your output will be parsed and type-checked according to the provided schema instance, "
        "so make sure all fields in your output match the schema exactly and there are no trailing commas!\n\n"
        "Here is the JSON Schema instance your output must adhere to. Include the enclosing markdown codeblock:\n"
        f"```json\n{json.dumps(schema)}\n```"
    )


def build_plan_prompt(objective: str = OBJECTIVE, abilities: list[str] | None = None) -> str:
    abilities = PLAN_ABILITIES if abilities is None else abilities
    return PLAN_PROMPT.format(
        abilities="\n".join(abilities),
        objective=objective,
        today=format_today(),
        format_instructions=format_instructions(),
    )


def parse_plan(text: str) -> Plan:
    """
    Parse model output into a Plan. Accepts a ```json fenced block or a bare JSON object
    (first '{' to last '}'). Raises PlanParseError when nothing valid is found.
    """
    raw = (text or "").strip()
    match = _FENCED_JSON.search(raw)
    candidate = match.group(1).strip() if match else raw
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end <= start:
        raise PlanParseError("No JSON object found in model output", raw)
    candidate = candidate[start : end + 1]
    try:
        return Plan.model_validate_json(candidate)
    except ValidationError as e:
        raise PlanParseError(f"Model output does not match plan schema: {e}", raw) from e


def generate_plan(objective: str = OBJECTIVE, abilities: list[str] | None = None) -> Plan:
    """Run the plan chain. Logs each step and returns the parsed Plan."""
    logger.info("[planner:generate_plan] IN  objective=%r", objective)
    prompt = build_plan_prompt(objective, abilities)
    logger.info("[planner:generate_plan] prompt_len=%d", len(prompt))
    out = complete(prompt, temperature=PLAN_TEMPERATURE)
    plan = parse_plan(out)
    for i, step in enumerate(plan.steps, 1):
        logger.info("[planner:generate_plan] step_%d %s", i, step)
    logger.info("[planner:generate_plan] OUT steps=%d", len(plan.steps))
    return plan
