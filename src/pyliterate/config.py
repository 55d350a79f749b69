"""Configuration for pyliterate.

Settings come from ``literate.toml`` and can be overridden per document by
its header attributes. Both use the same keys::

    output-dir = "build"
    output-rename = "main.c>a.out.c, util.c>lib.c"
    graph = true
    line-template = '#line {lineno} "{file}"'
    line-template-python = ""
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pyliterate.errors import ConfigError

CONFIG_FILE = "literate.toml"
DEFAULT_LINE_TEMPLATE = '#line {lineno} "{file}"'
TEMPLATE_PREFIX = "line-template"
# key of the default template in line_templates
DEFAULT_LANGUAGE = "_"

_TRUE = {"true", "yes", "on", "1", ""}
_FALSE = {"false", "no", "off", "0"}


def check_template(template: str) -> str:
    """Validate a line directive template; empty disables directives."""
    try:
        template.format(lineno=1, file="x")
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(
            f"Invalid line template {template!r}: only {{lineno}} and {{file}} are allowed"
        ) from e
    return template


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


class Config:
    """Configuration for one tangle/weave run."""

    def __init__(self) -> None:
        self.output_dir: str = "."
        self.output_rename: str = ""
        self.graph: bool = False
        self.source_patterns: List[str] = ["**/*.md"]
        self._templates: Dict[str, str] = {DEFAULT_LANGUAGE: DEFAULT_LINE_TEMPLATE}

    @staticmethod
    def from_dir(path: str) -> "Config":
        """Load configuration from a directory (looks for literate.toml)."""
        config_path = Path(path) / CONFIG_FILE
        if config_path.is_file():
            return Config.from_file(str(config_path))
        return Config()

    @staticmethod
    def from_file(path: str) -> "Config":
        """Load configuration from a specific TOML file."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e
        return Config().update(data)

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "Config":
        return Config().update(data)

    def update(self, data: Mapping[str, Any], strict: bool = True) -> "Config":
        """Apply configuration keys from ``data``; returns self.

        With ``strict`` unknown keys are an error, otherwise they are
        skipped (document attributes carry unrelated keys too).
        """
        for key, value in data.items():
            if key == "output-dir":
                self.output_dir = str(value)
            elif key == "output-rename":
                self.output_rename = str(value)
            elif key == "graph":
                self.graph = _as_bool(key, value)
            elif key == "source-patterns":
                if isinstance(value, str) or not all(isinstance(v, str) for v in value):
                    raise ConfigError("source-patterns must be a list of strings")
                self.source_patterns = list(value)
            elif key == TEMPLATE_PREFIX:
                self.set_template(DEFAULT_LANGUAGE, str(value))
            elif key.startswith(TEMPLATE_PREFIX + "-"):
                self.set_template(key[len(TEMPLATE_PREFIX) + 1 :], str(value))
            elif strict:
                raise ConfigError(f"Unknown configuration key {key!r}")
        return self

    def copy(self) -> "Config":
        other = Config()
        other.output_dir = self.output_dir
        other.output_rename = self.output_rename
        other.graph = self.graph
        other.source_patterns = list(self.source_patterns)
        other._templates = dict(self._templates)
        return other

    @property
    def line_template(self) -> str:
        return self._templates[DEFAULT_LANGUAGE]

    @line_template.setter
    def line_template(self, value: str) -> None:
        self.set_template(DEFAULT_LANGUAGE, value)

    @property
    def line_templates(self) -> Dict[str, str]:
        """Per-language template overrides."""
        return {k: v for k, v in self._templates.items() if k != DEFAULT_LANGUAGE}

    def set_template(self, language: str, template: str) -> None:
        if not language:
            raise ConfigError("Empty language in line template key")
        self._templates[language] = check_template(template)

    def template_for(self, language: Optional[str]) -> str:
        """Line template of ``language``, falling back to the default one."""
        if language is None:
            return self._templates[DEFAULT_LANGUAGE]
        return self._templates.get(language, self._templates[DEFAULT_LANGUAGE])

    def __repr__(self) -> str:
        return (
            f"Config(output_dir={self.output_dir!r}, graph={self.graph}, "
            f"line_template={self.line_template!r}, languages={sorted(self.line_templates)})"
        )
