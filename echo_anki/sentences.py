import logging
from dataclasses import dataclass

from config import Config
from echo_anki.classifier import PHRASE, WORD
from echo_anki.llm import complete, translate
from echo_anki.prompts import DIFFICULTY_LABELS, DIFFICULTY_TIERS, build_prompt
from echo_anki.result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentenceBundle:
    sentence: Result
    definition: Result
    translation: Result


def sentence_prompt(config: Config, target: str, difficulty: str, kind: str) -> str:
    """Pick and fill the sentence template for this kind of input."""
    if kind == WORD:
        purpose = f"sentence_{difficulty}"
        level = DIFFICULTY_TIERS[difficulty]
    else:
        purpose = "phrase_sentence"
        level = DIFFICULTY_LABELS[difficulty]
    return build_prompt(config.templates, purpose, {
        "target": target,
        "difficulty": level,
        "language": config.target_language,
    })


def definition_prompt(config: Config, target: str) -> str:
    return build_prompt(config.templates, "definition", {
        "target": target,
        "language": config.target_language,
        "native_language": config.native_language,
    })


def translation_prompt(config: Config, sentence: str) -> str:
    return build_prompt(config.templates, "translation", {
        "sentence": sentence,
        "language": config.target_language,
        "native_language": config.native_language,
    })


def generate(config: Config, target: str, difficulty: str, kind: str) -> SentenceBundle:
    """Generate the example sentence, a definition of the target and a translation.

    The calls are independent: a failed definition still leaves a usable
    sentence. The translation is only requested once there is a sentence.
    """
    sentence = complete(config, sentence_prompt(config, target, difficulty, kind))
    definition = complete(config, definition_prompt(config, target))
    if not definition.ok:
        logger.warning("No definition for '%s': %s", target, definition.error)

    if sentence.ok:
        translation = translate(config, translation_prompt(config, sentence.value))
        if not translation.ok:
            logger.warning("No translation for '%s': %s", sentence.value, translation.error)
    else:
        translation = Result.failure("no sentence to translate")

    return SentenceBundle(sentence=sentence, definition=definition, translation=translation)


def check_templates(config: Config) -> None:
    """Build every prompt once with sample values so template errors surface at startup."""
    for difficulty in DIFFICULTY_TIERS:
        sentence_prompt(config, "sample", difficulty, WORD)
    sentence_prompt(config, "sample phrase", "b1", PHRASE)
    definition_prompt(config, "sample")
    translation_prompt(config, "sample sentence")
