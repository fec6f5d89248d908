"""Render configured layouts and write them to disk."""

from dataclasses import dataclass
from pathlib import Path

from zjwatch.config import Config
from zjwatch.panels import render_layout
from zjwatch.xdg_paths import resolve_template_path


@dataclass
class GeneratedLayout:
    """A rendered layout and where it belongs."""

    path: Path
    content: str
    panel_count: int


def load_template(template: Path, base_dir: Path | None = None) -> str:
    """Read a template file.

    Args:
        template: The template path from the config.
        base_dir: Directory for relative paths. Defaults to the current directory.

    Returns:
        The template text.
    """
    return resolve_template_path(template, base_dir).read_text(encoding="utf-8")


def save_layout(path: Path, content: str) -> None:
    """Write a rendered layout, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def generate_layouts(config: Config, template: str, dry_run: bool = False) -> list[GeneratedLayout]:
    """Render and write every layout in declaration order.

    Stops at the first error. Layouts written before it stay on disk.

    Args:
        config: The loaded configuration.
        template: The template text.
        dry_run: If True, render without writing.

    Returns:
        The generated layouts.
    """
    generated: list[GeneratedLayout] = []
    for layout in config.layouts:
        content = render_layout(template, layout)
        if not dry_run:
            save_layout(layout.path, content)
        generated.append(GeneratedLayout(path=layout.path, content=content, panel_count=len(layout.watch)))
    return generated
