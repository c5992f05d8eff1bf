from unittest.mock import MagicMock

import pytest

from config import Config

TEMPLATES = {
    "sentence_a2": "Write a <difficulty> <language> sentence using <target>.",
    "sentence_b1": "Write an <difficulty> <language> sentence using <target>.",
    "sentence_b2": "Write an <difficulty> <language> sentence using <target>.",
    "phrase_sentence": "Write a <language> sentence at level <difficulty> with the phrase <target>.",
    "definition": "Define <target> from <language> in <native_language>.",
    "translation": "Translate from <language> to <native_language>: <sentence>",
}


@pytest.fixture
def config(tmp_path):
    """Config pointing the audio directory at a temporary folder."""
    return Config(
        target_language="French",
        native_language="English",
        templates=dict(TEMPLATES),
        openai_api_key="test-key",
        tts_api_key="test-key",
        audio_dir=str(tmp_path / "speech_files"),
        deck_name="Test Deck",
    )


def json_response(data):
    """A requests.Response stand-in whose json() returns ``data``."""
    resp = MagicMock()
    resp.json.return_value = data
    resp.raise_for_status.return_value = None
    return resp


def chat_response(content, total_tokens=42, cached_tokens=None):
    usage = {"total_tokens": total_tokens}
    if cached_tokens is not None:
        usage["prompt_tokens_details"] = {"cached_tokens": cached_tokens}
    return json_response({
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": usage,
    })
