"""Generate Zellij layouts with watch panes from a template."""

__version__ = "0.1.0"
