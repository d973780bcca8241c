"""Model access: any OpenAI-compatible chat API.

Config is read from a .env file (drop it in your project root) or env vars.

Setup: pick ONE provider:

  # Groq
  BRANDCHECK_LLM_API_KEY=gsk_...
  BRANDCHECK_LLM_BASE_URL=https://api.groq.com/openai/v1
  BRANDCHECK_LLM_MODEL=meta-llama/llama-4-scout-17b-16e-instruct

  # Gemini (OpenAI-compatible endpoint, accepts video parts)
  BRANDCHECK_LLM_API_KEY=...
  BRANDCHECK_LLM_BASE_URL=https://generativelanguage.googleapis.com/v1beta/openai/
  BRANDCHECK_LLM_MODEL=gemini-2.0-flash

  # OpenAI (direct)
  OPENAI_API_KEY=sk-...
"""

from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from . import config
from .errors import LLMNotConfigured

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


def get_llm_config() -> tuple[str | None, str | None, str]:
    """Return (api_key, base_url, model) from config (.env file or env vars)."""
    api_key = (
        config.get("BRANDCHECK_LLM_API_KEY")
        or config.get("GROQ_API_KEY")
        or config.get("OPENAI_API_KEY")
        or None
    )
    base_url = config.get("BRANDCHECK_LLM_BASE_URL") or None
    model = config.get("BRANDCHECK_LLM_MODEL", DEFAULT_MODEL)
    return api_key, base_url, model


def get_client() -> tuple[AsyncOpenAI, str]:
    """Build a client for the configured provider. Returns (client, model)."""
    api_key, base_url, model = get_llm_config()
    if not api_key:
        raise LLMNotConfigured(
            "No LLM API key configured. Set BRANDCHECK_LLM_API_KEY, GROQ_API_KEY or OPENAI_API_KEY."
        )
    client_kwargs: dict[str, Any] = {"api_key": api_key}
    if base_url:
        client_kwargs["base_url"] = base_url
    return AsyncOpenAI(**client_kwargs), model


async def complete(
    system_prompt: str,
    content: list[dict[str, Any]],
    temperature: float = 0.2,
) -> str:
    """Send one system + user exchange and return the raw reply text."""
    client, model = get_client()
    logger.info("Calling LLM: model=%s parts=%d", model, len(content))
    response = await client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": content},
        ],
        temperature=temperature,
    )
    if not response.choices:
        raise ValueError("LLM returned no choices")
    return (response.choices[0].message.content or "").strip()


# ── Tolerant JSON extraction ─────────────────────────────────────


def _strip_fences(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[-1].rsplit("```", 1)[0].strip()
    return raw


def _balanced_end(text: str, start: int) -> int | None:
    """Index just past the bracket that closes text[start], or None."""
    stack: list[str] = []
    in_string = False
    escaped = False
    pairs = {"{": "}", "[": "]"}

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in pairs:
            stack.append(pairs[ch])
        elif ch in "}]":
            if not stack or stack.pop() != ch:
                return None
            if not stack:
                return i + 1
    return None


def extract_json(raw: str, openers: str = "{[") -> Any:
    """Parse the first balanced JSON value in a model reply.

    Models often wrap the payload in prose or code fences, so the reply
    is scanned for the first bracketed span that parses. ``openers``
    restricts which brackets may start the value.
    """
    text = _strip_fences(raw)
    for i, ch in enumerate(text):
        if ch not in openers:
            continue
        end = _balanced_end(text, i)
        if end is None:
            continue
        try:
            return json.loads(text[i:end])
        except json.JSONDecodeError:
            continue
    raise ValueError(f"No JSON payload found in model reply ({len(raw)} chars)")
