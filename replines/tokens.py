r"""
Line tokenizer.

Grammar (single left-to-right scan with a pending buffer)
- \x      → x literally, inside or outside quotes (a trailing lone '\' is kept as-is).
- "..."   → quoted span; '...' likewise. The quote characters are not kept and a
            span may open in the middle of a token ('ab"c d"' → 'abc d').
- quotes do not nest: inside a "-span a ' is an ordinary character.
- delimiter (outside quotes) → ends the current token; runs of delimiters never
            produce empty tokens.
- an unterminated span is not an error: the rest of the input is taken literally.

Delimiters
- Unset (default): any of space, tab, CR, LF and backspace.
- a one-character string: exactly that character.

Examples
    >>> split("one two three")
    ('one', 'two', 'three')
    >>> split('"hello world" test')
    ('hello world', 'test')
    >>> split(r"line\ break end")
    ('line break', 'end')
    >>> split("a,b,,c", ",")
    ('a', 'b', 'c')
"""
from .faults import InvalidDelimiterError
from .utils import Unset

WHITESPACES = frozenset("\n\t\r\b ")
QUOTES = frozenset("\"'")


def _delimiter(delimiter):
    """
    normalize the delimiter option into a membership set.
    """
    if delimiter is Unset:
        return WHITESPACES
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise InvalidDelimiterError(
            "delimiter must be a one-character string, got %r" % (delimiter,),
            delimiter,
            hint="omit the delimiter to split on whitespaces",
        )
    return frozenset(delimiter)


def split(source, /, delimiter=Unset):
    """
    split one raw input line into a tuple of tokens.

    parameters
    - source: str
      the raw line (quotes and escapes are resolved, see module docs).
    - delimiter: Unset | str
      Unset for whitespaces, otherwise a single character.

    returns
    - tuple[str, ...]: possibly empty, never containing empty strings.

    errors
    - TypeError when source is not a string.
    - InvalidDelimiterError when delimiter is not a single character.
    """
    if not isinstance(source, str):
        raise TypeError("split() argument must be a string")
    delimiters = _delimiter(delimiter)

    tokens = []
    buffer = []
    quote = None
    length = len(source)
    index = 0
    while index < length:
        char = source[index]
        index += 1

        if char == "\\" and index < length:
            buffer.append(source[index])
            index += 1
            continue

        if quote is not None:
            if char == quote:
                quote = None
            else:
                buffer.append(char)
            continue

        if char in QUOTES:
            quote = char
            continue

        if char in delimiters:
            if buffer:
                tokens.append("".join(buffer))
                buffer.clear()
            continue

        buffer.append(char)

    if buffer:
        tokens.append("".join(buffer))

    return tuple(tokens)


def join(tokens, /):
    r"""
    build a source line that split() turns back into `tokens`.

    every token is wrapped in double quotes; embedded '\' and '"' are escaped.
    empty tokens have no spelling in the grammar and vanish on the way back.
    """
    return " ".join('"%s"' % token.replace("\\", "\\\\").replace('"', '\\"') for token in tokens)


__all__ = (
    "WHITESPACES",
    "split",
    "join",
)
