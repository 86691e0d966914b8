"""
Agent tools (abilities): definitions and execution for the tool-calling agent.

Tools: search_internet (web search via ddgs), send_tweet (stub), create_video (Holoworld render).
Every tool returns a ToolResult: a human-readable summary for the model plus a structured artifact.
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from ddgs import DDGS

from app.core.config import SEARCH_MAX_RESULTS
from app.services.video_service import create_video

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result of one tool call: content goes back to the model, artifact stays in history."""

    content: str
    artifact: dict[str, Any] = field(default_factory=dict)


# OpenAI function-calling format: list of tool definitions
AGENT_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "search_internet",
            "description": "searches the internet for up to date information given a query",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "the search query to use to search the internet",
                    }
                },
                "required": ["query"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "send_tweet",
            "description": "posts a tweet online given some text",
            "parameters": {
                "type": "object",
                "properties": {
                    "tweetText": {
                        "type": "string",
                        "description": "the text of the tweet",
                    }
                },
                "required": ["tweetText"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "create_video",
            "description": "generate a video with a script",
            "parameters": {
                "type": "object",
                "properties": {
                    "script": {
                        "type": "string",
                        "description": "the text of video",
                    }
                },
                "required": ["script"],
            },
        },
    },
]


def _search_internet_impl(query: str) -> ToolResult:
    """Run web search using ddgs. Search failures are reported to the model, not raised."""
    q = (query or "").strip()
    if not q:
        return ToolResult("Error: query is required.")
    try:
        with DDGS() as ddgs:
            results = list(ddgs.text(q, max_results=SEARCH_MAX_RESULTS))
    except Exception as e:
        logger.warning("[tools] search_internet failed: %s", e)
        return ToolResult(f"Web search failed: {e}")
    if not results:
        return ToolResult("No results found.", {"results": []})
    lines = []
    hits = []
    for i, r in enumerate(results[:SEARCH_MAX_RESULTS], 1):
        title = (r.get("title") or "").strip()
        body = (r.get("body") or "").strip()
        href = (r.get("href") or "").strip()
        lines.append(f"{i}. {title}\n{body}\nURL: {href}")
        hits.append({"title": title, "url": href})
    return ToolResult("\n\n".join(lines), {"results": hits})


def _send_tweet_impl(tweet_text: str) -> ToolResult:
    # No Twitter client wired up yet; acknowledge with a local id
    text = (tweet_text or "").strip()
    if not text:
        return ToolResult("Error: tweetText is required.")
    tweet_id = uuid.uuid4().hex[:16]
    logger.info("[tools] send_tweet tweet_id=%s text_len=%d", tweet_id, len(text))
    return ToolResult("Tweet posted successfully!", {"tweetId": tweet_id})


def _create_video_impl(script: str) -> ToolResult:
    """Render errors (HTTP failure, failed job) propagate to the caller."""
    render_id, url = create_video(script)
    return ToolResult(f"url for the video is! {url}", {"renderId": render_id, "url": url})


def parse_arguments(raw: Any) -> dict[str, Any]:
    """Tool-call arguments arrive as a JSON string from the API; tolerate dicts and garbage."""
    if isinstance(raw, dict):
        return raw
    try:
        args = json.loads(raw) if raw else {}
    except (TypeError, json.JSONDecodeError):
        return {}
    return args if isinstance(args, dict) else {}


def execute_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
    """
    Execute a tool by name with the given arguments. Returns a ToolResult for the model.
    """
    args = arguments or {}
    logger.info("[tools] execute_tool name=%r arguments=%r", name, args)

    if name == "search_internet":
        return _search_internet_impl(args.get("query") or "")

    if name == "send_tweet":
        return _send_tweet_impl(args.get("tweetText") or "")

    if name == "create_video":
        script = (args.get("script") or "").strip()
        if not script:
            return ToolResult("Error: script is required.")
        return _create_video_impl(script)

    return ToolResult(f"Unknown tool: {name}")
