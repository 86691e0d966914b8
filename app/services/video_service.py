"""
Video rendering: submit a render job to the Holoworld video server and poll it to completion.

Responsibility: Build the fixed render payload, talk to the render REST API, and block
until the job resolves. Called by the create_video ability; no agent logic here.
"""

import logging
import time
from typing import Any, Callable

import httpx

from app.core.config import (
    RENDER_MAX_POLLS,
    RENDER_POLL_INTERVAL,
    VIDEO_HTTP_TIMEOUT,
    VIDEO_SERVER_API_KEY,
    VIDEO_SERVER_BASE_URL,
)
from app.core.errors import (
    RenderFailedError,
    RenderServiceError,
    RenderTimeoutError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

# Fixed scene parameters
ASPECT_RATIO = "1/1"
VOICE_ID = "GVG9vYrd7AzWuz0Aw0ZJ"
BACKGROUND_IMAGE_PATH = "/images/neon.png"
AVATAR_MODEL_ID = "ava"

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


def build_render_payload(script: str, base_url: str = VIDEO_SERVER_BASE_URL) -> dict[str, Any]:
    """Render request body: one scene narrating the script over the neon background."""
    return {
        "aspectRatio": ASPECT_RATIO,
        "withCaption": False,
        "brainrot": False,
        "scenes": [
            {
                "text": script,
                "background": {
                    "type": "image",
                    "source": f"{base_url}{BACKGROUND_IMAGE_PATH}",
                },
                "voiceId": VOICE_ID,
                "includeOutro": True,
                "modelConfig": {
                    "id": AVATAR_MODEL_ID,
                    "scale": 0.2,
                    "x": None,  # center
                    "y": -75,
                },
            }
        ],
    }


def get_video_client(base_url: str | None = None, api_key: str | None = None) -> httpx.Client:
    """httpx client bound to the video server with the x-api-key header set."""
    base_url = VIDEO_SERVER_BASE_URL if base_url is None else base_url
    api_key = VIDEO_SERVER_API_KEY if api_key is None else api_key
    if not base_url:
        raise ServiceUnavailableError(
            "Video server is not configured. Set HOLOWORLD_VIDEO_SERVER_BASE_URL."
        )
    return httpx.Client(
        base_url=base_url,
        headers={"x-api-key": api_key or ""},
        timeout=VIDEO_HTTP_TIMEOUT,
    )


def _json_body(response: httpx.Response) -> dict[str, Any] | None:
    """Response JSON object, or None when the body is not JSON or not an object."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def submit_render(client: httpx.Client, payload: dict[str, Any]) -> str:
    """POST /renders; returns the server-issued render id."""
    scenes = payload.get("scenes") or []
    logger.info("[video:submit_render] IN  scenes=%d", len(scenes))
    response = client.post("/renders", json=payload)
    if not response.is_success:
        logger.warning("[video:submit_render] error %s: %s", response.status_code, response.text[:200])
        raise RenderServiceError(response.status_code, response.text, action="submit")
    body = _json_body(response)
    render_id = str(body.get("id") or "") if body is not None else ""
    if not render_id:
        logger.warning("[video:submit_render] no render id in response: %s", response.text[:200])
        raise RenderServiceError(response.status_code, response.text, action="submit")
    logger.info("[video:submit_render] OUT render_id=%s", render_id)
    return render_id


def get_render_status(client: httpx.Client, render_id: str) -> dict[str, Any]:
    """GET /api/renders/{id}; returns the status object (status, url, errorMessage)."""
    response = client.get(f"/api/renders/{render_id}")
    if not response.is_success:
        logger.warning("[video:get_render_status] error %s: %s", response.status_code, response.text[:200])
        raise RenderServiceError(response.status_code, response.text, action="status poll")
    body = _json_body(response)
    if body is None:
        raise RenderServiceError(response.status_code, response.text, action="status poll")
    return body


def wait_for_render(
    client: httpx.Client,
    render_id: str,
    poll_interval: float = RENDER_POLL_INTERVAL,
    max_polls: int | None = RENDER_MAX_POLLS,
    sleep: Callable[[float], None] | None = None,
) -> str:
    """
    Poll the render until it resolves. Returns the video url on 'completed',
    raises RenderFailedError on 'failed'. Any other status waits poll_interval and polls again.

    max_polls of None or <= 0 polls forever; a permanently pending job blocks the caller.
    A positive max_polls raises RenderTimeoutError after that many unresolved polls.
    """
    logger.info("[video:wait_for_render] IN  render_id=%s poll_interval=%.1fs max_polls=%s", render_id, poll_interval, max_polls if max_polls and max_polls > 0 else "unbounded")
    sleep = sleep or time.sleep
    polls = 0
    while True:
        data = get_render_status(client, render_id)
        status = data.get("status")
        polls += 1
        if status == STATUS_COMPLETED:
            url = data.get("url") or ""
            logger.info("[video:wait_for_render] OUT render_id=%s polls=%d url=%s", render_id, polls, url)
            return url
        if status == STATUS_FAILED:
            reason = data.get("errorMessage")
            logger.warning("[video:wait_for_render] render_id=%s failed: %s", render_id, reason)
            raise RenderFailedError(render_id, reason)
        logger.debug("[video:wait_for_render] render_id=%s poll=%d status=%r", render_id, polls, status)
        if max_polls is not None and max_polls > 0 and polls >= max_polls:
            raise RenderTimeoutError(render_id, polls, status)
        sleep(poll_interval)


def create_video(script: str, client: httpx.Client | None = None) -> tuple[str, str]:
    """
    Render a video narrating the script. Blocks until the render resolves.
    Returns (render_id, url).
    """
    logger.info("[video:create_video] IN  script_len=%d", len(script or ""))
    if client is None:
        with get_video_client() as owned:
            return _render(owned, script)
    return _render(client, script)


def _render(client: httpx.Client, script: str) -> tuple[str, str]:
    payload = build_render_payload(script, str(client.base_url).rstrip("/"))
    render_id = submit_render(client, payload)
    url = wait_for_render(client, render_id)
    logger.info("[video:create_video] OUT render_id=%s url=%s", render_id, url)
    return render_id, url
