"""Shell quoting for watch commands."""

import shlex
from dataclasses import dataclass, field


class EmptyCommandError(ValueError):
    """Raised when a command has no executable token."""


@dataclass(frozen=True)
class QuotedCommand:
    """A command whose executable and arguments are shell-escaped."""

    executable: str
    args: list[str] = field(default_factory=list)

    @property
    def args_text(self) -> str:
        """Arguments joined by a single space."""
        return " ".join(self.args)

    def command_line(self) -> str:
        """Flatten into a single shell command line."""
        return " ".join([self.executable, *self.args])


def shell_quote(token: str) -> str:
    """Escape a token so a POSIX shell reads it back as exactly one word.

    Args:
        token: The raw token. May be empty or contain any character.

    Returns:
        The escaped token.
    """
    return shlex.quote(token)


def markup_string(value: str) -> str:
    """Render a value as a double-quoted KDL string literal.

    Args:
        value: The text to embed.

    Returns:
        The literal, including the surrounding quotes.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def split_command(command: str) -> list[str]:
    """Split a command string on runs of whitespace.

    This is lossy: an argument that itself contains whitespace cannot be
    expressed. Use a token list in the config when that matters.

    Args:
        command: The command string.

    Returns:
        The tokens (empty for a blank string).
    """
    return command.split()


def quote_command(tokens: list[str], quote: bool = False) -> QuotedCommand:
    """Shell-escape an executable and its arguments.

    Args:
        tokens: Executable followed by zero or more arguments.
        quote: Also wrap each escaped argument in a double-quoted literal.

    Returns:
        The quoted command.

    Raises:
        EmptyCommandError: If tokens is empty.
    """
    if not tokens:
        raise EmptyCommandError("Command cannot be empty.")

    executable = shell_quote(tokens[0])
    args = [shell_quote(arg) for arg in tokens[1:]]
    if quote:
        args = [markup_string(arg) for arg in args]
    return QuotedCommand(executable=executable, args=args)
