import html
import os

from config import Config
from echo_anki.classifier import SENTENCE
from echo_anki.highlight import highlight
from echo_anki.sentences import SentenceBundle

REVEAL_HINT = "Show translation (click or press T)"

# Clicking the hint, or pressing T, shows the hidden translation.
REVEAL_SCRIPT = """<script>
(function () {
  var box = document.getElementById("echo-reveal");
  if (!box) { return; }
  var reveal = function () {
    box.querySelector(".reveal-hint").style.display = "none";
    box.querySelector(".reveal-text").style.display = "block";
  };
  box.onclick = reveal;
  document.onkeydown = function (e) {
    if (e.key === "t" || e.key === "T") { reveal(); }
  };
})();
</script>"""

REVEAL_BLOCK = (
    '<div id="echo-reveal" class="reveal" style="cursor: pointer">'
    '<div class="reveal-hint">{hint}</div>'
    '<div class="reveal-text" style="display: none">{translation}</div>'
    "</div>"
)


def _text(value: str) -> str:
    return html.escape(value, quote=False)


def _audio_attachment(path: str, field: str) -> dict:
    return {
        "path": os.path.abspath(path),
        "filename": os.path.basename(path),
        "fields": [field],
    }


def front_html(sentence: str, target: str, kind: str) -> str:
    """The target-language sentence, with the target in bold unless the input was itself a sentence."""
    if kind == SENTENCE:
        return _text(sentence)
    return highlight(sentence, target, escape=_text)


def back_html(definition: str, translation: str) -> str:
    parts = []
    if definition:
        parts.append(f'<div class="definition">{_text(definition)}</div>')
    if translation:
        parts.append(REVEAL_BLOCK.format(hint=REVEAL_HINT, translation=_text(translation)))
        parts.append(REVEAL_SCRIPT)
    return "<br>".join(parts)


def build_flashcard(config: Config, target: str, kind: str, bundle: SentenceBundle, audio_file: str) -> dict:
    """Build the AnkiConnect note for the primary deck."""
    return {
        "deckName": config.deck_name,
        "modelName": config.note_type,
        "fields": {
            config.front_field: front_html(bundle.sentence.value, target, kind),
            config.back_field: back_html(bundle.definition.value, bundle.translation.value),
        },
        "options": {
            "allowDuplicate": False,
        },
        "tags": list(config.tags),
        "audio": [_audio_attachment(audio_file, config.audio_field)],
    }


def build_bilingual_flashcard(config: Config, bundle: SentenceBundle, audio_file: str) -> dict:
    """Reverse card: native-language sentence in front, the original and its audio behind."""
    return {
        "deckName": config.bilingual_deck_name,
        "modelName": config.note_type,
        "fields": {
            config.front_field: _text(bundle.translation.value),
            config.back_field: _text(bundle.sentence.value),
        },
        "options": {
            "allowDuplicate": False,
        },
        "tags": list(config.tags),
        "audio": [_audio_attachment(audio_file, config.back_field)],
    }
