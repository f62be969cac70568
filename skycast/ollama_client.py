"""Thin client for calling the local Ollama chat API."""

import requests

from .config import Settings
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ollama_client")


class OllamaError(RuntimeError):
    """Ollama could not produce a reply."""


class OllamaClient:
    """Minimal, single-attempt client for the Ollama chat API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.url = f"{str(settings.ollama_base_url).rstrip('/')}/api/chat"
        self.model = settings.ollama_model
        self.timeout = settings.ollama_timeout_seconds
        self.session = session or requests.Session()

    def chat(self, messages, *, options: dict | None = None) -> str:
        """Send a non-streaming chat request and return the assistant content."""
        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": options or {"temperature": 0.7},
        }

        try:
            r = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise OllamaError(f"Ollama POST failed: {exc} (model={self.model}, url={self.url})") from exc

        logger.debug("Ollama POST status %s, response: %s", r.status_code, (r.text or "")[:200])
        if r.status_code != 200:
            raise OllamaError(
                f"Ollama POST failed with status {r.status_code}: {(r.text or '')[:200]} "
                f"(model={self.model}, url={self.url})"
            )

        try:
            data = r.json()
        except ValueError as exc:
            raise OllamaError(f"Ollama returned non-JSON response: {r.text[:200]}") from exc
        content = data.get("message", {}).get("content", "")
        if isinstance(content, (dict, list)):
            content = str(content)
        return content
