"""
Agent LLM: OpenAI chat completions.
complete() backs the plan chain; chat_with_tools() backs the model node of the agent graph.
"""

import logging
from typing import Any

from openai import OpenAI

from app.core.config import LLM_API_TIMEOUT, OPENAI_API_KEY, OPENAI_LLM_MODEL
from app.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

# Keys the chat completions API accepts on a message; anything else (e.g. tool artifacts) stays local
_MESSAGE_KEYS = ("role", "content", "name", "tool_calls", "tool_call_id")


def get_client() -> OpenAI:
    if not OPENAI_API_KEY:
        raise ServiceUnavailableError("OpenAI is not configured. Set OPENAI_API_KEY.")
    return OpenAI(api_key=OPENAI_API_KEY, timeout=LLM_API_TIMEOUT)


def to_openai_message(message: dict[str, Any]) -> dict[str, Any]:
    """Strip local-only fields so the message can be sent back to the API."""
    out = {k: message[k] for k in _MESSAGE_KEYS if k in message}
    if out.get("role") == "tool":
        # tool messages take no name field
        out.pop("name", None)
    return out


def complete(prompt: str, temperature: float | None = None) -> str:
    """Single-turn completion: one user message in, generated text out."""
    logger.info("[llm:complete] IN  prompt_len=%d temperature=%s", len(prompt), temperature)
    kwargs: dict[str, Any] = {}
    if temperature is not None:
        kwargs["temperature"] = temperature
    response = get_client().chat.completions.create(
        model=OPENAI_LLM_MODEL,
        messages=[{"role": "user", "content": prompt}],
        **kwargs,
    )
    msg = response.choices[0].message if response.choices else None
    out = ((msg.content if msg else None) or "").strip()
    logger.info("[llm:complete] OUT response_len=%d", len(out))
    logger.debug("[llm:complete] OUT response_full=%r", out)
    return out


def chat_with_tools(
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]],
) -> dict[str, Any]:
    """
    Call OpenAI chat with the tools bound. Returns the assistant message as a dict:
    {"role": "assistant", "content": str | None} plus "tool_calls" when the model requested any.
    tool_calls keep the API shape ({id, type, function: {name, arguments}}) so the message
    can be appended to history and sent back unchanged.
    """
    logger.info("[llm:chat_with_tools] IN  messages=%d tools=%s", len(messages), [t["function"]["name"] for t in tools])
    response = get_client().chat.completions.create(
        model=OPENAI_LLM_MODEL,
        messages=[to_openai_message(m) for m in messages],
        tools=tools,
    )
    msg = response.choices[0].message if response.choices else None
    if msg is None:
        return {"role": "assistant", "content": ""}
    out: dict[str, Any] = {"role": "assistant", "content": msg.content}
    tool_calls = []
    for tc in msg.tool_calls or []:
        fn = getattr(tc, "function", None)
        if not fn:
            continue
        tool_calls.append({
            "id": tc.id,
            "type": "function",
            "function": {"name": fn.name, "arguments": fn.arguments or "{}"},
        })
    if tool_calls:
        out["tool_calls"] = tool_calls
        logger.info("[llm:chat_with_tools] OUT tool_calls=%s", [t["function"]["name"] for t in tool_calls])
    else:
        logger.info("[llm:chat_with_tools] OUT content_len=%d", len(msg.content or ""))
    return out
