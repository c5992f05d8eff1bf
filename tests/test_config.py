"""Tests for configuration loading."""

import pytest

from config import DEFAULT_TRANSLATION_PROMPT, ConfigError, load_config, log_level

BASE_ENV = {
    "OPENAI_API_KEY": "sk-test",
    "PROMPT_A2": "a2 <target>",
    "PROMPT_B1": "b1 <target>",
    "PROMPT_B2": "b2 <target>",
    "WORD_DEFINITION_PROMPT": "define <target>",
    "PHRASE_SENTENCE_PROMPT": "phrase <target>",
}


class TestLoadConfig:

    def test_defaults(self):
        config = load_config(BASE_ENV)

        assert config.target_language == "French"
        assert config.native_language == "English"
        assert config.templates["sentence_a2"] == "a2 <target>"
        assert config.templates["translation"] == DEFAULT_TRANSLATION_PROMPT
        assert config.tts_provider == "openai"
        assert config.tts_api_key == "sk-test"
        assert config.audio_dir == "speech_files"
        assert config.anki_connect_url == "http://localhost:8765"
        assert config.bilingual_deck_name == ""

    def test_overrides(self):
        env = dict(
            BASE_ENV,
            TARGET_LANGUAGE="Spanish",
            NATIVE_LANGUAGE="German",
            TTS_PROVIDER="Edge",
            EDGE_VOICE="es-ES-ElviraNeural",
            TTS_API_KEY="tts-key",
            ANKI_DECK_NAME="Español",
            BILINGUAL_DECK_NAME="Español::bilingual",
            LLM_MAX_TOKENS="80",
        )

        config = load_config(env)

        assert config.target_language == "Spanish"
        assert config.native_language == "German"
        assert config.tts_provider == "edge"
        assert config.edge_voice == "es-ES-ElviraNeural"
        assert config.tts_api_key == "tts-key"
        assert config.deck_name == "Español"
        assert config.bilingual_deck_name == "Español::bilingual"
        assert config.llm_max_tokens == 80

    def test_missing_keys_are_all_reported(self):
        env = dict(BASE_ENV, PROMPT_B2="  ")
        del env["OPENAI_API_KEY"]
        del env["WORD_DEFINITION_PROMPT"]

        with pytest.raises(ConfigError) as exc_info:
            load_config(env)

        message = str(exc_info.value)
        assert "PROMPT_B2" in message
        assert "WORD_DEFINITION_PROMPT" in message
        assert "OPENAI_API_KEY" in message

    def test_unknown_tts_provider(self):
        with pytest.raises(ConfigError, match="TTS_PROVIDER"):
            load_config(dict(BASE_ENV, TTS_PROVIDER="polly"))

    def test_bad_token_cap(self):
        with pytest.raises(ConfigError, match="LLM_MAX_TOKENS"):
            load_config(dict(BASE_ENV, LLM_MAX_TOKENS="lots"))


class TestLogLevel:

    def test_defaults_to_info(self):
        assert log_level({}) == "INFO"

    def test_is_case_insensitive(self):
        assert log_level({"LOG_LEVEL": " warning "}) == "WARNING"

    def test_unknown_level(self):
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            log_level({"LOG_LEVEL": "verbose"})

    def test_read_from_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("LOG_LEVEL=WARNING\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        # setenv first so the delenv is undone and .env values don't leak
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.delenv("LOG_LEVEL")

        assert log_level() == "WARNING"
