"""Loader for the static template, snippet library and analysis prompt."""

from __future__ import annotations

from pathlib import Path
import yaml

from .errors import ResourceError
from .logging import get_logger
from .snippets.library import SnippetLibrary

DEFAULT_RESOURCES_DIR = Path(__file__).with_name("resources")
TEMPLATE_FILENAME = "integration-template.md"
SNIPPETS_FILENAME = "code-snippets.yml"
ANALYSIS_PROMPT_FILENAME = "analyze-codebase.md"


class ResourceLoader:
    """Reads the required text resources from a single directory."""

    def __init__(
        self,
        root: Path | None = None,
        *,
        template_name: str = TEMPLATE_FILENAME,
        snippets_name: str = SNIPPETS_FILENAME,
        analysis_prompt_name: str = ANALYSIS_PROMPT_FILENAME,
    ) -> None:
        self.root = root or DEFAULT_RESOURCES_DIR
        self.template_name = template_name
        self.snippets_name = snippets_name
        self.analysis_prompt_name = analysis_prompt_name
        self.logger = get_logger("resources")

    def load_template(self) -> str:
        return self._read(self.template_name)

    def load_analysis_prompt(self) -> str:
        return self._read(self.analysis_prompt_name)

    def load_snippets(self) -> SnippetLibrary:
        text = self._read(self.snippets_name)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ResourceError(f"Failed to parse {self.snippets_name}: {exc}") from exc
        if not isinstance(data, dict):
            raise ResourceError(f"{self.snippets_name} must contain a mapping at the root")
        return SnippetLibrary.from_dict(data)

    def _read(self, name: str) -> str:
        path = self._path(name)
        self.logger.debug("Loading resource %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ResourceError(f"Unable to read resource {path}: {exc}") from exc

    def _path(self, name: str) -> Path:
        candidate = Path(name)
        if candidate.is_absolute():
            return candidate
        return self.root / name


__all__ = [
    "ANALYSIS_PROMPT_FILENAME",
    "DEFAULT_RESOURCES_DIR",
    "ResourceLoader",
    "SNIPPETS_FILENAME",
    "TEMPLATE_FILENAME",
]
