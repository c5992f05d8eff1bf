import argparse
import logging
import sys

from config import Config, ConfigError, load_config, log_level
from echo_anki.anki_connect import add_note, ensure_deck_exists
from echo_anki.classifier import classify
from echo_anki.flashcard import build_bilingual_flashcard, build_flashcard
from echo_anki.prompts import DIFFICULTY_TIERS
from echo_anki.sentences import check_templates, generate
from echo_anki.tts import audio_path, generate_audio

logger = logging.getLogger("echo_anki")

DIFFICULTIES = tuple(DIFFICULTY_TIERS)


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def run(config: Config, target: str, difficulty: str) -> bool:
    """Generate and publish the card(s) for one target. Returns True on success."""
    kind = classify(target)

    # Step 1: Sentence, definition and translation
    print(f"[1/4] Generating {difficulty} example for {kind} '{target}'...")
    bundle = generate(config, target, difficulty, kind)
    if not bundle.sentence.ok:
        logger.error("Sentence generation failed for '%s': %s", target, bundle.sentence.error)
        return False
    print(f"      Sentence: {bundle.sentence.value}")
    print(f"      Definition: {bundle.definition.value}")
    print(f"      Translation: {bundle.translation.value}")

    # Step 2: TTS audio
    print("[2/4] Generating audio...")
    audio = generate_audio(config, bundle.sentence.value, audio_path(config, bundle.sentence.value))
    if not audio.ok:
        logger.error("No audio for '%s', skipping note creation: %s", bundle.sentence.value, audio.error)
        return False
    print(f"      Audio saved to {audio.value}")

    # Step 3: Decks
    print("[3/4] Checking decks...")
    ensure_deck_exists(config, config.deck_name)
    bilingual = bool(config.bilingual_deck_name) and bundle.translation.ok
    if bilingual:
        ensure_deck_exists(config, config.bilingual_deck_name)

    # Step 4: Add to Anki
    print("[4/4] Adding to Anki...")
    note = add_note(config, build_flashcard(config, target, kind, bundle, audio.value))
    if not note.ok:
        return False
    print(f"      Flashcard added (Note ID: {note.value})")

    if bilingual:
        companion = add_note(config, build_bilingual_flashcard(config, bundle, audio.value))
        if companion.ok:
            print(f"      Bilingual flashcard added (Note ID: {companion.value})")
    return True


def _setup_logging() -> None:
    try:
        level = log_level()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config_or_exit():
    try:
        config = load_config()
        check_templates(config)
    except ConfigError as e:
        logger.error("Configuration incomplete: %s", e)
        sys.exit(1)
    return config


def main(argv=None):
    parser = UsageParser(
        prog="echo-anki",
        description="Generate an Anki flashcard with example sentence and audio",
    )
    parser.add_argument("target", help="word, phrase or sentence to learn")
    parser.add_argument("difficulty", type=str.lower, choices=DIFFICULTIES, help="difficulty level")
    args = parser.parse_args(argv)
    _setup_logging()

    target = args.target.strip()
    if not target:
        parser.error("target text must not be empty")

    config = _load_config_or_exit()
    try:
        ok = run(config, target, args.difficulty)
    except ConfigError as e:
        logger.error("Configuration incomplete: %s", e)
        sys.exit(1)
    if not ok:
        sys.exit(1)
    print("\nDone.")


def batch_main(argv=None):
    """Run the pipeline for every line of a words file."""
    parser = UsageParser(
        prog="echo-anki-batch",
        description="Generate Anki flashcards for each line of a file",
    )
    parser.add_argument("words_file", help="file with one target per line")
    parser.add_argument("--difficulty", default="b1", choices=DIFFICULTIES)
    args = parser.parse_args(argv)
    _setup_logging()

    try:
        with open(args.words_file, encoding="utf-8") as f:
            targets = [line.strip() for line in f if line.strip()]
    except OSError as e:
        logger.error("Cannot read %s: %s", args.words_file, e)
        sys.exit(1)

    config = _load_config_or_exit()
    failed = []
    for target in targets:
        print(f"\n=== {target} ===")
        try:
            ok = run(config, target, args.difficulty)
        except ConfigError as e:
            logger.error("Configuration incomplete: %s", e)
            sys.exit(1)
        if not ok:
            failed.append(target)

    print(f"\n{len(targets) - len(failed)}/{len(targets)} flashcards added.")
    if failed:
        logger.error("Failed targets: %s", ", ".join(failed))
        sys.exit(1)


if __name__ == "__main__":
    main()
