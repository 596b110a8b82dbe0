"""AI roast generation through the Google Generative Language API.

The client is stateless: every call sends one prompt and returns the first
candidate's text. The API key is configuration passed in at construction;
its absence only surfaces when a roast is actually requested.
"""

import logging

import httpx

from stackroast.app.config import Settings
from stackroast.app.errors import CollaboratorError, ConfigurationError, ValidationError
from stackroast.app.models.roast import ROAST_TYPES
from stackroast.app.models.stack import Stack

logger = logging.getLogger(__name__)

_FLAVOURS = {
    "brutal": "Be savage and merciless, but keep it about the technology, not the person.",
    "constructive": (
        "Be honest and pointed, then follow each jab with a concrete suggestion "
        "for what to use instead."
    ),
    "meme": "Write it like a meme caption or a viral tweet. Short, punchy, absurd.",
}


def build_roast_prompt(stack: Stack, roast_type: str = "brutal") -> str:
    """Render the roast prompt for a stack in the requested flavour."""
    if roast_type not in ROAST_TYPES:
        raise ValidationError(f"roast_type must be one of: {', '.join(ROAST_TYPES)}")

    lines = [
        "You are a senior engineer roasting someone's technology stack.",
        _FLAVOURS[roast_type],
        "",
        f"Project: {stack.title}",
        f"Frontend: {stack.frontend}",
        f"Backend: {stack.backend}",
        f"Database: {stack.database}",
        f"Hosting: {stack.hosting}",
    ]
    if stack.other_tools:
        lines.append(f"Other tools: {', '.join(stack.other_tools)}")
    if stack.description:
        lines.append(f"Description: {stack.description}")
    lines += ["", "Reply with the roast only, at most 80 words, no preamble."]
    return "\n".join(lines)


def extract_text(payload: dict) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response envelope."""
    try:
        return payload["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


class AIRoaster:
    """Thin async client for the ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "AIRoaster":
        return cls(
            api_key=settings.google_api_key,
            model=settings.ai_model,
            base_url=settings.ai_base_url,
            timeout=settings.ai_timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str | None) -> str:
        if not prompt or not prompt.strip():
            raise ValidationError("Missing prompt")
        if not self.api_key:
            raise ConfigurationError("API key not configured")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"Content-Type": "application/json", "X-Goog-Api-Key": self.api_key}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.exception("AI provider request failed")
            raise CollaboratorError(f"AI provider request failed: {exc}") from exc

        if response.is_error:
            logger.warning("AI provider returned %s", response.status_code)
            raise CollaboratorError(
                f"Google API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CollaboratorError("AI provider returned invalid JSON") from exc
        return extract_text(payload)
