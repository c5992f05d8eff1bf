import asyncio
import io
import logging
import os
import random
import re
import sys

import aiohttp
import edge_tts
import requests
from edge_tts.exceptions import EdgeTTSException

from config import Config
from echo_anki.result import Result

logger = logging.getLogger(__name__)

OPENAI_VOICES = ("alloy", "echo", "fable", "nova", "onyx", "shimmer")


def _needs_selector_loop(platform: str = sys.platform, version: tuple = sys.version_info) -> bool:
    """Selector loop for aiohttp on Windows; loop policies are deprecated from 3.14."""
    return platform == "win32" and version < (3, 14)


if _needs_selector_loop():
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


def sanitize_filename(text: str, max_length: int = 80) -> str:
    """Turn a sentence into a file stem: punctuation dropped, spaces to hyphens."""
    stem = re.sub(r"[^\w\s-]", "", text, flags=re.UNICODE).strip()
    stem = re.sub(r"\s+", "-", stem)[:max_length].strip("-")
    return stem or "speech"


def audio_path(config: Config, sentence: str) -> str:
    return os.path.join(config.audio_dir, f"{sanitize_filename(sentence)}.mp3")


def pick_voice(config: Config) -> str:
    if config.tts_provider == "edge":
        return config.edge_voice
    return random.choice(OPENAI_VOICES)


def _openai_speech(config: Config, text: str, voice: str) -> bytes:
    if not config.tts_api_key:
        raise ValueError("No API key configured for speech synthesis")

    payload = {
        "model": config.tts_model,
        "voice": voice,
        "input": text,
        "response_format": "mp3",
        "instructions": f"Speak in {config.target_language}.",
    }
    headers = {"Authorization": f"Bearer {config.tts_api_key}"}
    buffer = io.BytesIO()
    with requests.post(config.tts_url, json=payload, headers=headers,
                       timeout=config.tts_timeout, stream=True) as resp:
        resp.raise_for_status()
        for chunk in resp.iter_content(chunk_size=8192):
            buffer.write(chunk)
    return buffer.getvalue()


async def _edge_speech(text: str, voice: str, timeout: float) -> bytes:
    buffer = io.BytesIO()
    communicate = edge_tts.Communicate(
        text, voice, connect_timeout=int(timeout), receive_timeout=int(timeout)
    )
    async for chunk in communicate.stream():
        if chunk["type"] == "audio":
            buffer.write(chunk["data"])
    return buffer.getvalue()


def generate_audio(config: Config, text: str, filepath: str) -> Result:
    """Synthesize ``text`` to an mp3 at ``filepath`` and return the path."""
    voice = pick_voice(config)
    logger.info("Synthesizing speech with %s voice %s", config.tts_provider, voice)
    try:
        if config.tts_provider == "edge":
            audio = asyncio.run(_edge_speech(text, voice, config.tts_timeout))
        else:
            audio = _openai_speech(config, text, voice)
    except (requests.RequestException, aiohttp.ClientError, asyncio.TimeoutError,
            EdgeTTSException, ValueError) as e:
        logger.error("Speech synthesis failed: %s", e)
        return Result.failure(str(e))

    if not audio:
        logger.error("Speech synthesis returned no audio")
        return Result.failure("empty audio")

    directory = os.path.dirname(filepath)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filepath, "wb") as f:
            f.write(audio)
    except OSError as e:
        logger.error("Could not write audio to %s: %s", filepath, e)
        return Result.failure(str(e))
    return Result.success(filepath)
