import re

WORD = "word"
PHRASE = "phrase"
SENTENCE = "sentence"

_WORD_RE = re.compile(r"^[\w\-']+$")
_TOKEN_RE = re.compile(r"[\w\-']+")
_TERMINAL_PUNCTUATION = (".", "!", "?")


def is_word(text: str) -> bool:
    return bool(_WORD_RE.match(text.strip()))


def classify(text: str) -> str:
    """Tag the input as a word, phrase or sentence."""
    text = text.strip()
    if is_word(text):
        return WORD
    if text.endswith(_TERMINAL_PUNCTUATION) and len(_TOKEN_RE.findall(text)) >= 2:
        return SENTENCE
    return PHRASE
