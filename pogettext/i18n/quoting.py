"""C-style string literal decoding for .po files."""

import re

from pogettext.i18n.errors import QuotedStringError

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "?": "?",
}

_ESCAPE_RE = re.compile(
    r"""\\(?:
        (?P<simple>[abfnrtv\\'"?])
        |x(?P<hex>[0-9A-Fa-f]{2})
        |(?P<octal>[0-7]{3})
        |u(?P<u16>[0-9A-Fa-f]{4})
        |U(?P<u32>[0-9A-Fa-f]{8})
    )""",
    re.VERBOSE,
)


def unquote(literal: str) -> str:
    """Decode a double-quoted, C-escaped literal.

    ``\\x`` and octal escapes denote raw bytes and are decoded as UTF-8
    together with the surrounding text.

    Args:
        literal: Text including the surrounding double quotes.

    Returns:
        The decoded string.

    Raises:
        QuotedStringError: If the quotes are missing, an inner quote is not
            escaped, or an escape sequence is invalid.
    """
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise QuotedStringError(f"not a double-quoted string: {literal!r}")

    body = literal[1:-1]
    out = bytearray()
    pos = 0
    while pos < len(body):
        char = body[pos]
        if char == '"':
            raise QuotedStringError(f"unescaped quote at offset {pos + 1}")
        if char == "\n":
            raise QuotedStringError("newline inside quoted string")
        if char != "\\":
            out += char.encode("utf-8")
            pos += 1
            continue

        match = _ESCAPE_RE.match(body, pos)
        if match is None:
            raise QuotedStringError(
                f"invalid escape sequence {body[pos:pos + 2]!r} at offset {pos + 1}"
            )
        if match.group("simple") is not None:
            out += _SIMPLE_ESCAPES[match.group("simple")].encode("utf-8")
        elif match.group("hex") is not None:
            out.append(int(match.group("hex"), 16))
        elif match.group("octal") is not None:
            value = int(match.group("octal"), 8)
            if value > 0xFF:
                raise QuotedStringError(f"octal escape out of range: \\{match.group('octal')}")
            out.append(value)
        else:
            codepoint = int(match.group("u16") or match.group("u32"), 16)
            try:
                out += chr(codepoint).encode("utf-8")
            except (ValueError, UnicodeEncodeError) as e:
                raise QuotedStringError(f"invalid unicode escape U+{codepoint:X}") from e
        pos = match.end()

    return out.decode("utf-8", errors="replace")
