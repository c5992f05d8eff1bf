"""Tests for input classification."""

import pytest

from echo_anki.classifier import PHRASE, SENTENCE, WORD, classify, is_word


class TestClassify:
    """Word / phrase / sentence tagging."""

    @pytest.mark.parametrize("text", ["bonjour", "après-midi", "aujourd'hui", "42", "  chat  "])
    def test_single_tokens_are_words(self, text):
        assert classify(text) == WORD

    @pytest.mark.parametrize("text", ["Le chat dort.", "Tu viens ce soir ?", "Quelle surprise!"])
    def test_punctuated_multi_token_text_is_sentence(self, text):
        assert classify(text) == SENTENCE

    def test_unpunctuated_multi_token_text_is_phrase(self):
        assert classify("bon après-midi") == PHRASE

    def test_single_token_with_terminal_punctuation_is_phrase(self):
        """A lone word followed by a period has fewer than two tokens."""
        assert classify("Bonjour.") == PHRASE

    @pytest.mark.parametrize("text", ["", "   ", "...", "?!"])
    def test_degenerate_input_is_phrase(self, text):
        assert classify(text) == PHRASE


def test_is_word_ignores_surrounding_whitespace():
    assert is_word(" chat ")
    assert not is_word("le chat")
