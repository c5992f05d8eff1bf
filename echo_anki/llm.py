import logging
import re

import requests

from config import Config
from echo_anki.result import Result

logger = logging.getLogger(__name__)

_QUOTED_RE = re.compile(r"[\"“«]\s*([^\"”»]+?)\s*[\"”»]")
_WRAPPING_QUOTES = "\"“”«»"


def strip_trailing_period(text: str) -> str:
    """Drop a single trailing period."""
    text = text.strip()
    if text.endswith("."):
        text = text[:-1]
    return text


def clean_translation(text: str) -> str:
    """Reduce a chatty reply like 'X translates to "Y"' to the bare translation."""
    text = text.strip()
    unquoted = False
    if "translates to" in text.lower():
        quoted = _QUOTED_RE.findall(text)
        if len(quoted) >= 2:
            text = quoted[-1]
            unquoted = True
    if len(text) >= 2 and text[0] in _WRAPPING_QUOTES and text[-1] in _WRAPPING_QUOTES:
        text = text[1:-1].strip()
        unquoted = True
    if unquoted:
        text = strip_trailing_period(text)
    return text


def _log_usage(usage: dict) -> None:
    total = usage.get("total_tokens")
    cached = (usage.get("prompt_tokens_details") or {}).get("cached_tokens")
    if cached is not None:
        logger.info("Token usage: total=%s cached=%s", total, cached)
    else:
        logger.info("Token usage: total=%s", total)


def complete(config: Config, prompt: str, max_tokens: int = None) -> Result:
    """Send one prompt to the chat completions endpoint and return the answer text."""
    payload = {
        "model": config.llm_model,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": max_tokens or config.llm_max_tokens,
    }
    headers = {"Authorization": f"Bearer {config.openai_api_key}"}

    try:
        resp = requests.post(config.llm_url, json=payload, headers=headers, timeout=config.llm_timeout)
        resp.raise_for_status()
        data = resp.json()
        content = data["choices"][0]["message"]["content"] or ""
    except requests.RequestException as e:
        logger.error("Text generation request failed: %s", e)
        return Result.failure(str(e))
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected text generation response: %r", e)
        return Result.failure(f"malformed response: {e!r}")

    _log_usage(data.get("usage") or {})

    text = strip_trailing_period(content)
    if not text:
        logger.error("Text generation returned an empty answer")
        return Result.failure("empty completion")
    return Result.success(text)


def translate(config: Config, prompt: str, max_tokens: int = None) -> Result:
    """Like complete(), with the reply trimmed down to the translation itself."""
    result = complete(config, prompt, max_tokens)
    if not result.ok:
        return result
    text = clean_translation(result.value)
    if not text:
        logger.error("Translation reply was empty after clean-up: %r", result.value)
        return Result.failure("empty translation")
    return Result.success(text)
