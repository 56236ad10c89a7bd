from __future__ import annotations

import re
from pathlib import Path

from gameguessr.config import settings

# Lower-case identifiers only, so the JSON examples inside templates
# (``{"type": ...}``) never look like placeholders.
_PLACEHOLDER = re.compile(r"\{([a-z_][a-z0-9_]*)\}")


class TemplateError(LookupError):
    """A prompt template is missing or was rendered without all its variables."""


class PromptLoader:
    """Game prompts stored as ``<templates_dir>/<mode>/<NAME>.txt``.

    Rendering is strict: every ``{name}`` placeholder must be supplied, and
    substituted values are never scanned again, so a player typing
    ``{secret_game}`` gets that literal text sent to the model.
    """

    def __init__(self, templates_dir: str | Path | None = None):
        self._dir = Path(templates_dir or settings.prompts_dir)
        self._cache: dict[str, str] = {}

    def load(self, category: str, name: str) -> str:
        key = f"{category}/{name}"
        if key not in self._cache:
            path = self._dir / category / f"{name}.txt"
            if not path.is_file():
                raise TemplateError(f"No prompt template {key} under {self._dir}.")
            self._cache[key] = path.read_text(encoding="utf-8").strip()
        return self._cache[key]

    def placeholders(self, category: str, name: str) -> set[str]:
        """Names a template expects, e.g. ``{"user_answer", "questions_left"}``."""
        return set(_PLACEHOLDER.findall(self.load(category, name)))

    def render(self, category: str, name: str, **variables: object) -> str:
        """Fill every placeholder in one pass; values go through ``str()``."""
        template = self.load(category, name)
        missing = self.placeholders(category, name) - variables.keys()
        if missing:
            raise TemplateError(
                f"Template {category}/{name} needs {', '.join(sorted(missing))}."
            )
        return _PLACEHOLDER.sub(lambda m: str(variables[m.group(1)]), template)
