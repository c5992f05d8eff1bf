import re
from typing import Callable, Optional

from echo_anki.classifier import is_word


def highlight(sentence: str, target: str, escape: Optional[Callable[[str], str]] = None) -> str:
    """Wrap each occurrence of ``target`` in ``sentence`` with <b> tags.

    Single words only match whole words, so "chat" leaves "chaton" alone.
    Matching ignores case but keeps the sentence's own casing. ``escape`` is
    applied to the pieces of the raw sentence, never to the inserted tags.
    """
    if escape is None:
        escape = str
    target = target.strip()
    if not target:
        return escape(sentence)
    pattern = re.escape(target)
    if is_word(target):
        pattern = rf"\b{pattern}\b"

    parts = []
    last = 0
    for match in re.finditer(pattern, sentence, flags=re.IGNORECASE):
        parts.append(escape(sentence[last:match.start()]))
        parts.append(f"<b>{escape(match.group(0))}</b>")
        last = match.end()
    parts.append(escape(sentence[last:]))
    return "".join(parts)
