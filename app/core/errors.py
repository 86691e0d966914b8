"""
Application errors.

ServiceUnavailableError is for a dependency (LLM, video server) that is misconfigured,
so the API can return 503 with a user-facing message. Render errors carry what the
video server reported and propagate to the HTTP layer untouched.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. OpenAI, video server) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RenderServiceError(Exception):
    """Non-success HTTP status from the video server (submit or status poll)."""

    def __init__(self, status_code: int, message: str, action: str = "request") -> None:
        self.status_code = status_code
        self.message = message
        self.action = action
        super().__init__(f"HTTP error during video {action}! status: {status_code} data: {message}")


class RenderFailedError(Exception):
    """The render job finished with status 'failed'."""

    def __init__(self, render_id: str, reason: str | None) -> None:
        self.render_id = render_id
        self.reason = reason
        super().__init__(f"Failed to render video! Reason: {reason}")


class RenderTimeoutError(Exception):
    """Render job still unresolved after the configured number of polls."""

    def __init__(self, render_id: str, polls: int, last_status: str | None) -> None:
        self.render_id = render_id
        self.polls = polls
        self.last_status = last_status
        super().__init__(
            f"Render {render_id} not finished after {polls} polls (last status: {last_status!r})"
        )


class PlanParseError(ValueError):
    """Model output could not be parsed into a Plan."""

    def __init__(self, message: str, raw: str = "") -> None:
        self.message = message
        self.raw = raw
        super().__init__(message)
