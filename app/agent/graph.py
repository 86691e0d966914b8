"""
LangGraph agent: call_model → (tools → call_model)* → END.

The model node calls OpenAI with the abilities bound and appends its reply to history;
the tools node runs every requested tool call and appends the results. The graph is built
per request and ends when the model stops calling tools or MAX_AGENT_ROUNDS is reached.
"""

import logging
from typing import Any, Literal, TypedDict

from langgraph.graph import END, StateGraph

from app.agent.llm import chat_with_tools
from app.agent.prompts import OBJECTIVE, system_prompt
from app.agent.tools import AGENT_TOOLS, execute_tool, parse_arguments
from app.core.config import MAX_AGENT_ROUNDS

logger = logging.getLogger(__name__)


class AgentState(TypedDict):
    messages: list  # OpenAI-style dicts: user / assistant (+tool_calls) / tool (+artifact)
    rounds: int  # model turns taken so far


def _call_model(state: AgentState) -> dict:
    """Node: call the model with the system prompt + history; append its reply."""
    messages = state.get("messages") or []
    rounds = (state.get("rounds") or 0) + 1
    logger.info("[graph:call_model] IN  round=%d messages=%d", rounds, len(messages))
    response = chat_with_tools(
        [{"role": "system", "content": system_prompt()}, *messages],
        AGENT_TOOLS,
    )
    logger.info("[graph:call_model] OUT tool_calls=%d content_len=%d", len(response.get("tool_calls") or []), len(response.get("content") or ""))
    return {"messages": [*messages, response], "rounds": rounds}


def _call_tools(state: AgentState) -> dict:
    """Node: execute each tool call on the last message, in order; append one tool message per call."""
    messages = state.get("messages") or []
    last = messages[-1] if messages else {}
    results = []
    for tc in last.get("tool_calls") or []:
        fn = tc.get("function") or {}
        name = fn.get("name", "")
        result = execute_tool(name, parse_arguments(fn.get("arguments")))
        logger.info("[graph:tools] name=%s content_len=%d artifact=%r", name, len(result.content), result.artifact)
        results.append({
            "role": "tool",
            "tool_call_id": tc.get("id", ""),
            "name": name,
            "content": result.content,
            "artifact": result.artifact,
        })
    return {"messages": [*messages, *results]}


def route_model_output(state: AgentState) -> Literal["tools", "__end__"]:
    """If the last message requests tool calls, run them; otherwise end the graph."""
    messages = state.get("messages") or []
    last = messages[-1] if messages else {}
    tool_calls = last.get("tool_calls") or []
    rounds = state.get("rounds") or 0
    if not tool_calls:
        next_node = END
    elif rounds >= MAX_AGENT_ROUNDS:
        logger.warning("[graph:route_model_output] round cap %d reached with %d pending tool calls; ending", MAX_AGENT_ROUNDS, len(tool_calls))
        next_node = END
    else:
        next_node = "tools"
    logger.info("[graph:route_model_output] tool_calls=%d rounds=%d -> %s", len(tool_calls), rounds, next_node)
    return next_node


def build_graph():
    """
    Build and compile the agent graph.
    call_model → (tools if tool calls requested) → call_model … → END.
    """
    graph = StateGraph(AgentState)

    graph.add_node("call_model", _call_model)
    graph.add_node("tools", _call_tools)

    graph.set_entry_point("call_model")
    graph.add_conditional_edges("call_model", route_model_output)
    graph.add_edge("tools", "call_model")

    return graph.compile()


def run_agent(objective: str = OBJECTIVE) -> dict[str, Any]:
    """
    Run the agent synchronously from a single user message.
    Returns {"messages": [...]}: the full accumulated history (system prompt excluded).
    """
    if not objective or not str(objective).strip():
        raise ValueError("objective is required")
    q = str(objective).strip()
    logger.info("[run_agent] START objective=%r", q)
    initial: AgentState = {
        "messages": [{"role": "user", "content": q}],
        "rounds": 0,
    }
    graph = build_graph()
    # Two supersteps per round plus the final model turn
    final = graph.invoke(initial, config={"recursion_limit": 2 * MAX_AGENT_ROUNDS + 2})
    messages = final.get("messages") or []
    logger.info("[run_agent] END rounds=%d messages=%d", final.get("rounds") or 0, len(messages))
    return {"messages": messages}
