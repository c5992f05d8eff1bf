import logging

import requests

from config import Config
from echo_anki.result import Result

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6


class AnkiConnectError(RuntimeError):
    """AnkiConnect was unreachable or answered with an error."""


def _invoke(config: Config, action: str, **params):
    """Send a request to AnkiConnect."""
    payload = {"action": action, "version": ANKI_CONNECT_VERSION, "params": params}
    try:
        resp = requests.post(config.anki_connect_url, json=payload, timeout=config.anki_timeout)
        resp.raise_for_status()
        result = resp.json()
    except requests.ConnectionError:
        raise AnkiConnectError(
            "Cannot connect to AnkiConnect. "
            "Is Anki open with the AnkiConnect add-on installed?"
        )
    except (requests.RequestException, ValueError) as e:
        raise AnkiConnectError(f"AnkiConnect request failed: {e}")
    if result.get("error"):
        raise AnkiConnectError(f"AnkiConnect error: {result['error']}")
    return result.get("result")


def ensure_deck_exists(config: Config, deck_name: str) -> bool:
    """Create the deck if it doesn't already exist. Failures are only logged."""
    try:
        if deck_name in (_invoke(config, "deckNames") or []):
            return True
        logger.info("Creating deck '%s'", deck_name)
        _invoke(config, "createDeck", deck=deck_name)
    except AnkiConnectError as e:
        logger.error("Could not ensure deck '%s': %s", deck_name, e)
        return False
    return True


def add_note(config: Config, note: dict) -> Result:
    """Add a note to Anki; the result holds the new note id."""
    try:
        note_id = _invoke(config, "addNote", note=note)
    except AnkiConnectError as e:
        logger.error("Note rejected for deck '%s': %s", note.get("deckName"), e)
        return Result.failure(str(e))
    if note_id is None:
        logger.error("AnkiConnect returned no note id for deck '%s'", note.get("deckName"))
        return Result.failure("no note id returned")
    return Result.success(str(note_id))
