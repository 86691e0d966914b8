"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Server
PORT: int = int(os.getenv("PORT", "3000").strip() or "3000")

# OpenAI (plan chain + tool-calling agent)
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o").strip() or "gpt-4o"
)
PLAN_TEMPERATURE: float = 0.2
LLM_API_TIMEOUT: float = 60.0

# Holoworld video render server (from env)
VIDEO_SERVER_BASE_URL: str = os.getenv("HOLOWORLD_VIDEO_SERVER_BASE_URL", "").strip().rstrip("/")
VIDEO_SERVER_API_KEY: str = os.getenv("HOLO_VIDEO_SERVER_API_KEY", "").strip()
VIDEO_HTTP_TIMEOUT: float = 30.0

# Render polling. RENDER_MAX_POLLS=0 keeps polling until the job resolves.
RENDER_POLL_INTERVAL: float = float(os.getenv("RENDER_POLL_INTERVAL", "1.0").strip() or "1.0")
RENDER_MAX_POLLS: int = max(0, int(os.getenv("RENDER_MAX_POLLS", "0").strip() or "0"))

# Agent graph
MAX_AGENT_ROUNDS: int = 10

# Web search (search_internet ability)
SEARCH_MAX_RESULTS: int = 5
