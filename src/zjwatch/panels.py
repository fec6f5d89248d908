"""Render watch entries as Zellij pane blocks and splice them into a template."""

from dataclasses import dataclass

from zjwatch.config import Layout, WatchEntry
from zjwatch.quoting import EmptyCommandError, QuotedCommand, markup_string, quote_command

PLACEHOLDER = "${WATCH_PANELS}"

# Broadcast panes run through `script` so they join the synchronized input group
BROADCAST_SHELL = "script"
BROADCAST_FLAGS = "-fec"
BROADCAST_MARKER = ".broadcast"

_ARGS_INDENT = "    "


class PlaceholderError(ValueError):
    """Raised when a template does not hold exactly one placeholder."""


class MissingPlaceholderError(PlaceholderError):
    """Raised when the template has no placeholder."""


class DuplicatePlaceholderError(PlaceholderError):
    """Raised when the template has more than one placeholder."""


@dataclass(frozen=True)
class PanelBlock:
    """A single pane node.

    ``command.args`` holds argument literals already in markup form
    (double-quoted).
    """

    name: str
    command: QuotedCommand

    @property
    def is_nested(self) -> bool:
        """Whether the pane needs a child block for its arguments."""
        return bool(self.command.args)


def build_panel(entry: WatchEntry) -> PanelBlock:
    """Build the pane block for a watch entry.

    Args:
        entry: The watch entry.

    Returns:
        The pane block.

    Raises:
        EmptyCommandError: If the entry has no command tokens.
    """
    try:
        if entry.broadcast:
            quoted = quote_command(entry.tokens(), quote=False)
            return PanelBlock(
                name=entry.name,
                command=QuotedCommand(
                    executable=BROADCAST_SHELL,
                    args=[
                        markup_string(BROADCAST_FLAGS),
                        markup_string(quoted.command_line()),
                        markup_string(BROADCAST_MARKER),
                    ],
                ),
            )
        quoted = quote_command(entry.tokens(), quote=True)
    except EmptyCommandError as e:
        raise EmptyCommandError(f"Command cannot be empty (watch '{entry.name}').") from e

    return PanelBlock(name=entry.name, command=quoted)


def write_panel(block: PanelBlock) -> str:
    """Serialize a pane block.

    The name is written as given and is not escaped.

    Args:
        block: The pane block.

    Returns:
        The pane markup (one line, or three when nested).
    """
    header = f'pane name="{block.name}" command={markup_string(block.command.executable)}'
    if not block.is_nested:
        return header
    return f"{header} {{\n{_ARGS_INDENT}args {block.command.args_text}\n}}"


def render_panels(layout: Layout) -> str:
    """Render every watch entry of a layout, in declaration order.

    Args:
        layout: The layout.

    Returns:
        The pane blocks joined by newlines.
    """
    return "\n".join(write_panel(build_panel(entry)) for entry in layout.watch)


def render_layout(template: str, layout: Layout) -> str:
    """Replace the placeholder in a template with the layout's pane blocks.

    Args:
        template: Template text holding exactly one placeholder.
        layout: The layout to render.

    Returns:
        The rendered layout text.

    Raises:
        MissingPlaceholderError: If the placeholder is absent.
        DuplicatePlaceholderError: If the placeholder occurs more than once.
        EmptyCommandError: If a watch entry has no command tokens.
    """
    count = template.count(PLACEHOLDER)
    if count == 0:
        raise MissingPlaceholderError("The watch panel placeholder is missing!")
    if count > 1:
        raise DuplicatePlaceholderError(f"The watch panel placeholder appears {count} times, expected once.")

    return template.replace(PLACEHOLDER, render_panels(layout))
