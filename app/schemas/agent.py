"""Schemas for the tool-calling agent endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class AgentRunResponse(BaseModel):
    """Response for GET /tools: full accumulated message history of the agent run."""

    messages: list[dict[str, Any]] = Field(
        ...,
        description="Ordered messages: the user objective, assistant turns (with tool_calls) and tool results (content + artifact).",
    )
