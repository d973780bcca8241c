"""brandcheck configuration: loads settings from .env file or environment.

Config is loaded from (in priority order):
  1. Environment variables (highest priority)
  2. .env file in current directory
  3. .brandcheck/.env file
  4. Defaults

Keys:
  BRANDCHECK_LLM_API_KEY     model provider key (falls back to GROQ_API_KEY, OPENAI_API_KEY)
  BRANDCHECK_LLM_BASE_URL    OpenAI-compatible endpoint (Groq, OpenRouter, Gemini, Ollama...)
  BRANDCHECK_LLM_MODEL       model name, default gpt-4o-mini
  EXA_API_KEY                search provider key
  BRANDCHECK_SEARCH_URL      search endpoint, default https://api.exa.ai
  BRANDCHECK_SEARCH_TIMEOUT  seconds per search request, default 30
  BRANDCHECK_RISK_WINDOW_DAYS  lookback for contextual search, default 30
  BRANDCHECK_LOG_LEVEL       CLI log level, default WARNING
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_loaded = False


def _parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file (KEY=VALUE, one per line)."""
    values: dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip().strip("\"'")
        values[key] = value
    return values


def load_config() -> None:
    """Load config from .env files into os.environ (if not already set)."""
    global _loaded
    if _loaded:
        return
    _loaded = True

    candidates = [
        Path.cwd() / ".env",
        Path.cwd() / ".brandcheck" / ".env",
    ]

    for env_path in candidates:
        values = _parse_env_file(env_path)
        if values:
            logger.debug("Loaded config from %s", env_path)
            for key, value in values.items():
                if key not in os.environ:  # env vars take priority
                    os.environ[key] = value
            break  # use first found


def get(key: str, default: str = "") -> str:
    """Get a config value (loads .env on first call)."""
    load_config()
    return os.environ.get(key, default)


def get_int(key: str, default: int) -> int:
    raw = get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", key, raw, default)
        return default
