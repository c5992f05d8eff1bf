"""Runtime configuration, read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_TRANSLATION_PROMPT = (
    "Translate this <language> sentence into natural <native_language>. "
    "Reply with the translation only: <sentence>"
)

# Template purpose -> environment key. Every key except TRANSLATION_PROMPT is required.
TEMPLATE_KEYS = {
    "sentence_a2": "PROMPT_A2",
    "sentence_b1": "PROMPT_B1",
    "sentence_b2": "PROMPT_B2",
    "definition": "WORD_DEFINITION_PROMPT",
    "phrase_sentence": "PHRASE_SENTENCE_PROMPT",
    "translation": "TRANSLATION_PROMPT",
}

TTS_PROVIDERS = ("openai", "edge")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the configuration is incomplete or invalid."""


@dataclass(frozen=True)
class Config:
    target_language: str
    native_language: str
    templates: Mapping[str, str]
    openai_api_key: str = ""

    llm_url: str = "https://api.openai.com/v1/chat/completions"
    llm_model: str = "gpt-3.5-turbo"
    llm_max_tokens: int = 150
    llm_timeout: float = 60

    tts_provider: str = "openai"
    tts_url: str = "https://api.openai.com/v1/audio/speech"
    tts_model: str = "gpt-4o-mini-tts"
    tts_api_key: str = ""
    tts_timeout: float = 60
    edge_voice: str = "fr-FR-DeniseNeural"
    audio_dir: str = "speech_files"

    anki_connect_url: str = "http://localhost:8765"
    anki_timeout: float = 10
    deck_name: str = "echo-anki"
    bilingual_deck_name: str = ""
    note_type: str = "Basic"
    front_field: str = "Front"
    back_field: str = "Back"
    audio_field: str = "Front"
    tags: tuple = field(default=("echo-anki",))


def _environ() -> Mapping[str, str]:
    load_dotenv(find_dotenv(usecwd=True))
    return os.environ


def log_level(env: Optional[Mapping[str, str]] = None) -> str:
    """The LOG_LEVEL setting, checked against the standard level names."""
    if env is None:
        env = _environ()
    level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{level}'")
    return level


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from ``env`` (defaults to os.environ after loading .env).

    Raises ConfigError naming every missing key, so an incomplete setup fails
    before any request is made.
    """
    if env is None:
        env = _environ()

    def get(key: str, default: str = "") -> str:
        return (env.get(key) or default).strip()

    missing = []
    templates = {}
    for purpose, key in TEMPLATE_KEYS.items():
        value = get(key)
        if purpose == "translation" and not value:
            value = DEFAULT_TRANSLATION_PROMPT
        if not value:
            missing.append(key)
        templates[purpose] = value

    tts_provider = get("TTS_PROVIDER", "openai").lower()
    if tts_provider not in TTS_PROVIDERS:
        raise ConfigError(
            f"TTS_PROVIDER must be one of {', '.join(TTS_PROVIDERS)}, got '{tts_provider}'"
        )

    openai_api_key = get("OPENAI_API_KEY")
    if not openai_api_key:
        missing.append("OPENAI_API_KEY")
    tts_api_key = get("TTS_API_KEY", openai_api_key)

    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

    try:
        llm_max_tokens = int(get("LLM_MAX_TOKENS", "150"))
    except ValueError:
        raise ConfigError(f"LLM_MAX_TOKENS must be an integer, got '{get('LLM_MAX_TOKENS')}'")

    return Config(
        target_language=get("TARGET_LANGUAGE", "French"),
        native_language=get("NATIVE_LANGUAGE", "English"),
        templates=templates,
        openai_api_key=openai_api_key,
        llm_url=get("LLM_URL", Config.llm_url),
        llm_model=get("LLM_MODEL", Config.llm_model),
        llm_max_tokens=llm_max_tokens,
        tts_provider=tts_provider,
        tts_url=get("TTS_URL", Config.tts_url),
        tts_model=get("TTS_MODEL", Config.tts_model),
        tts_api_key=tts_api_key,
        edge_voice=get("EDGE_VOICE", Config.edge_voice),
        audio_dir=get("AUDIO_DIR", Config.audio_dir),
        anki_connect_url=get("ANKI_CONNECT_URL", Config.anki_connect_url),
        deck_name=get("ANKI_DECK_NAME", Config.deck_name),
        bilingual_deck_name=get("BILINGUAL_DECK_NAME"),
        note_type=get("ANKI_NOTE_TYPE", Config.note_type),
        front_field=get("ANKI_FRONT_FIELD", Config.front_field),
        back_field=get("ANKI_BACK_FIELD", Config.back_field),
        audio_field=get("ANKI_AUDIO_FIELD", Config.audio_field),
    )
