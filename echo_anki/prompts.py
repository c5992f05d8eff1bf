import re
from typing import Mapping

from config import ConfigError

DIFFICULTY_TIERS = {
    "a2": "beginner",
    "b1": "intermediate",
    "b2": "advanced",
}

DIFFICULTY_LABELS = {
    "a2": "A2 (elementary)",
    "b1": "B1 (intermediate)",
    "b2": "B2 (upper intermediate)",
}

PLACEHOLDERS = ("target", "difficulty", "language", "native_language", "sentence")

_PLACEHOLDER_RE = re.compile(r"<(\w+)>")


class MissingTemplateError(ConfigError):
    """No template is configured for the requested purpose."""


class UnresolvedPlaceholderError(ConfigError):
    """A known placeholder was left in a prompt without a value."""


def fill(template: str, substitutions: Mapping[str, str]) -> str:
    """Replace every ``<name>`` occurrence with its substitution."""
    def replace(match):
        return substitutions.get(match.group(1), match.group(0))

    return _PLACEHOLDER_RE.sub(replace, template)


def build_prompt(templates: Mapping[str, str], purpose: str, substitutions: Mapping[str, str]) -> str:
    """Fill the template configured for ``purpose``.

    Raises MissingTemplateError if the template is absent or blank and
    UnresolvedPlaceholderError if a known placeholder survives substitution.
    Unknown ``<...>`` text is left as written.
    """
    template = templates.get(purpose) or ""
    if not template.strip():
        raise MissingTemplateError(f"No prompt template configured for '{purpose}'")

    names = set(_PLACEHOLDER_RE.findall(template))
    leftover = sorted(names.intersection(PLACEHOLDERS) - set(substitutions))
    if leftover:
        raise UnresolvedPlaceholderError(
            f"Template '{purpose}' has unresolved placeholders: "
            + ", ".join(f"<{name}>" for name in leftover)
        )
    return fill(template, substitutions)
