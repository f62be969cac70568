"""Illustrative-scene side feature.

Takes only the location name, the current description and temperature, asks
a local language model to describe a matching scene, and never lets a
failure leak into the weather result.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from skycast.ollama_client import OllamaClient, OllamaError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="scene")

Reliability = Literal["Experimental", "Unavailable"]

SYSTEM_PROMPT_SCENE = """You write short, vivid descriptions of photographs for a weather app background.
Describe one realistic scene in two or three sentences. Focus on atmosphere, light and landscape or
cityscape typical of the place. Never mention numbers, units, forecasts or the app itself.
No lists, no headings, no markdown."""

PROMPT_TEMPLATE = (
    'A vibrant, high-quality photographic scene of "{description}" weather in "{location}", '
    "around {temperature}°C. Realistic atmospheric effects, landmarks or landscape typical of "
    "the location, no text, watermarks or overlays."
)


class SceneRequest(BaseModel):
    """The narrow input the scene generator is allowed to see."""
    location_display_name: str = Field(min_length=1)
    current_description: str = Field(min_length=1)
    current_temperature: int


class SceneResult(BaseModel):
    """Generated scene text, or why there is none."""
    prompt: str
    description: Optional[str] = None
    reliability: Reliability
    model_used: Optional[str] = None


def build_scene_prompt(request: SceneRequest) -> str:
    return PROMPT_TEMPLATE.format(
        description=request.current_description,
        location=request.location_display_name,
        temperature=request.current_temperature,
    )


def build_scene_messages(request: SceneRequest) -> list[dict]:
    """System + user messages for the chat model."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT_SCENE},
        {"role": "user", "content": build_scene_prompt(request)},
    ]


def _strip_markdown_fences(text: str) -> str:
    """Remove surrounding Markdown code fences from text."""
    if not text:
        return text
    t = text.strip()
    if not t.startswith("```"):
        return t
    lines = t.splitlines()
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def generate_scene(request: SceneRequest, client: OllamaClient | None, *, enabled: bool = True) -> SceneResult:
    """Describe a scene for the request; every failure becomes an Unavailable result."""
    prompt = build_scene_prompt(request)
    if not enabled or client is None:
        return SceneResult(prompt=prompt, reliability="Unavailable")

    try:
        raw = client.chat(build_scene_messages(request))
    except OllamaError as exc:
        logger.warning("Scene generation failed: %s", exc)
        return SceneResult(prompt=prompt, reliability="Unavailable", model_used=client.model)
    except Exception:
        logger.exception("Unexpected error during scene generation")
        return SceneResult(prompt=prompt, reliability="Unavailable", model_used=client.model)

    text = _strip_markdown_fences(raw or "")
    if not text:
        logger.warning("Scene generation returned an empty description")
        return SceneResult(prompt=prompt, reliability="Unavailable", model_used=client.model)
    return SceneResult(prompt=prompt, description=text, reliability="Experimental", model_used=client.model)
