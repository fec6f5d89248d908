"""Configuration loading for zjwatch."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from zjwatch.quoting import split_command

YAML_SUFFIXES = {".yaml", ".yml"}


class WatchEntry(BaseModel):
    """A command shown as one named pane."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    command: list[str] | str  # token list, or a string split on whitespace
    broadcast: bool = False

    def tokens(self) -> list[str]:
        """Get the command as executable + arguments."""
        if isinstance(self.command, str):
            return split_command(self.command)
        return list(self.command)


class Layout(BaseModel):
    """One generated layout file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    watch: list[WatchEntry]


class Config(BaseModel):
    """Root configuration: a template and the layouts rendered from it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    template: Path
    layouts: list[Layout] = Field(validation_alias=AliasChoices("layout", "layouts"))


@dataclass
class ConfigIssue:
    """A single problem found while loading a config file."""

    file: str
    field_name: str
    message: str
    value: object = field(default=None, repr=False)


class ConfigError(Exception):
    """Raised when a config file cannot be parsed or validated."""

    def __init__(self, issues: list[ConfigIssue]) -> None:
        self.issues = issues
        summary = "; ".join(f"{issue.field_name}: {issue.message}" for issue in issues)
        super().__init__(f"Invalid configuration ({summary})")


def _parse_document(text: str, fmt: str, source: str) -> dict[str, object]:
    """Parse raw TOML or YAML text into a dict.

    Args:
        text: The document text.
        fmt: Either "toml" or "yaml".
        source: Name used in error reports.

    Returns:
        The parsed mapping.

    Raises:
        ConfigError: On a syntax error or a non-mapping document.
    """
    try:
        if fmt == "yaml":
            raw = yaml.safe_load(text)
        else:
            raw = tomllib.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(
            [ConfigIssue(file=source, field_name="(file)", message=f"{fmt.upper()} parse error: {e}")]
        ) from e

    if not isinstance(raw, dict):
        raise ConfigError([ConfigIssue(file=source, field_name="(file)", message="Expected a mapping at top level")])
    return cast(dict[str, object], raw)


def parse_config(text: str, fmt: str = "toml", source: str = "<string>") -> Config:
    """Parse and validate config text.

    Args:
        text: The document text.
        fmt: Either "toml" or "yaml".
        source: Name used in error reports.

    Returns:
        The validated Config.

    Raises:
        ConfigError: If the document is malformed or fails validation.
    """
    data = _parse_document(text, fmt, source)
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        issues = [
            ConfigIssue(
                file=source,
                field_name=".".join(str(loc) for loc in error["loc"]) or "(root)",
                message=error["msg"],
                value=error.get("input"),
            )
            for error in e.errors()
        ]
        raise ConfigError(issues) from e


def load_config(path: Path) -> Config:
    """Load a config file, picking the format from its suffix.

    ``.yaml`` and ``.yml`` files are read as YAML, everything else as TOML.

    Args:
        path: Path to the config file.

    Returns:
        The validated Config.

    Raises:
        ConfigError: If the file is malformed, not UTF-8, or fails validation.
        OSError: If the file cannot be read.
    """
    fmt = "yaml" if path.suffix.lower() in YAML_SUFFIXES else "toml"
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(
            [ConfigIssue(file=str(path), field_name="(file)", message=f"Not valid UTF-8: {e.reason} at byte {e.start}")]
        ) from e
    return parse_config(text, fmt=fmt, source=str(path))


def display_config_errors(issues: list[ConfigIssue], console: Console) -> None:
    """Show config issues as a table, titled with the issue count and source.

    Args:
        issues: The issues to display.
        console: Rich console to output to.
    """
    if not issues:
        return

    table = Table(show_edge=False, box=None, padding=(0, 1))
    table.add_column("Field", style="bold")
    table.add_column("Problem", style="red")
    table.add_column("Got", style="dim")
    for issue in issues:
        got = "" if issue.value is None else repr(issue.value)
        table.add_row(Text(issue.field_name), Text(issue.message), Text(got))

    sources = ", ".join(dict.fromkeys(issue.file for issue in issues))
    noun = "error" if len(issues) == 1 else "errors"
    console.print(
        Panel(
            table,
            title=f"[red]{len(issues)} config {noun}[/]",
            subtitle=escape(sources),
            border_style="red",
        )
    )
