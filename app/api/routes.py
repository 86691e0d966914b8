"""
API route aggregator: register endpoints; no logic — only delegate to the agent modules.
"""

import logging

from fastapi import APIRouter, HTTPException

from app.agent.graph import run_agent
from app.agent.planner import generate_plan
from app.agent.prompts import OBJECTIVE
from app.core.errors import ServiceUnavailableError
from app.schemas.agent import AgentRunResponse
from app.schemas.plan import Plan

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Video agent backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Agent ---

@router.get(
    "/simple",
    response_model=Plan,
    tags=["agent"],
    summary="Generate a step-by-step plan for the fixed objective",
    description="Single prompt chain: objective + abilities → chat model → parsed plan. 503 if OpenAI is not configured; other failures are not handled.",
)
def get_simple() -> Plan:
    logger.info("[api:get_simple] IN  objective=%r", OBJECTIVE)
    try:
        plan = generate_plan(OBJECTIVE)
    except ServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    logger.info("[api:get_simple] OUT steps=%d", len(plan.steps))
    return plan


@router.get(
    "/tools",
    response_model=AgentRunResponse,
    tags=["agent"],
    summary="Run the tool-calling agent on the fixed objective",
    description="Runs the call_model/tools loop (search_internet, send_tweet, create_video) until the model stops calling tools. Returns the full message history. Blocks while a video renders.",
)
def get_tools() -> AgentRunResponse:
    logger.info("[api:get_tools] IN  objective=%r", OBJECTIVE)
    try:
        result = run_agent(OBJECTIVE)
    except ServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    logger.info("[api:get_tools] OUT messages=%d", len(result["messages"]))
    return AgentRunResponse(messages=result["messages"])
