"""
Output filters for Runner.print(): plain `str -> str` callables.

- colorize(text): render rich console markup ("[red]alert[/red]") to ANSI escapes.
- strip(text): drop the markup and keep the plain text.

Text that is not valid markup (a stray closing tag such as "[/x]") passes through
unchanged, so a filter never fails on arbitrary output.

    >>> runner = Runner(registry, filters=(colorize,))
    >>> runner.println("[bold green]ready[/bold green]")
"""
from rich.console import Console
from rich.errors import MarkupError
from rich.text import Text

_console = Console(force_terminal=True, color_system="standard", highlight=False, emoji=False)


def colorize(text, /):
    """
    render rich markup to a string carrying ANSI escape sequences.
    """
    text = str(text)
    try:
        rendered = Text.from_markup(text)
    except MarkupError:
        return text
    with _console.capture() as capture:
        _console.print(rendered, end="", soft_wrap=True)
    return capture.get()


def strip(text, /):
    text = str(text)
    try:
        return Text.from_markup(text).plain
    except MarkupError:
        return text


__all__ = (
    "colorize",
    "strip",
)
