"""XDG-compliant path management for zjwatch."""

from pathlib import Path

from xdg_base_dirs import xdg_config_home

APP_NAME = "zjwatch"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return xdg_config_home() / APP_NAME


def get_templates_dir() -> Path:
    """Get the shared templates directory path."""
    return get_config_dir() / "templates"


def resolve_template_path(template: Path, base_dir: Path | None = None) -> Path:
    """Find a template file.

    Relative paths are looked up in base_dir first, then in the shared
    templates directory.

    Args:
        template: The template path from the config.
        base_dir: Directory for relative paths. Defaults to the current directory.

    Returns:
        The resolved path. When nothing exists, the base_dir candidate.
    """
    if template.is_absolute():
        return template

    local = (base_dir or Path.cwd()) / template
    if local.exists():
        return local

    shared = get_templates_dir() / template
    if shared.exists():
        return shared
    return local
