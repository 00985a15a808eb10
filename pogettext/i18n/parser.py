"""Line-oriented .po parser.

Consumes raw .po bytes and builds an immutable Po catalog. Each physical
line is trimmed and dispatched on its keyword::

    msgctxt "..."       flush the pending entry, set the context
    msgid "..."         flush the pending entry, start a new one
    msgid_plural "..."  set the plural source string
    msgstr "..."        set form 0
    msgstr[N] "..."     set form N
    "..."               continuation of the last form, or header text

Everything else (comments, blank lines, unknown keywords) is ignored.
"""

import os
import re
from typing import Dict, List, Optional, Tuple, Union

from pogettext.core.logging import get_module_logger
from pogettext.i18n.errors import (
    PluralExpressionError,
    PoParseError,
    QuotedStringError,
    SourceNotFoundError,
)
from pogettext.i18n.models import Po, Translation
from pogettext.i18n.plural import PluralExpression, compile_plural
from pogettext.i18n.quoting import unquote

logger = get_module_logger()

MSGCTXT = "msgctxt"
MSGID_PLURAL = "msgid_plural"
MSGID = "msgid"
MSGSTR = "msgstr"

_INDEX_RE = re.compile(r"\[([0-9]+)\]")


class _LineError(Exception):
    """Internal: a single line could not be parsed."""


class _ParseState:
    """Mutable state carried across one parse pass."""

    def __init__(self):
        self.msgid = ""
        self.plural_id = ""
        self.forms: List[str] = []
        self.context = ""
        self.raw_header = ""
        self.translations: Dict[str, Translation] = {}
        self.contexts: Dict[str, Dict[str, Translation]] = {}

    def set_form(self, index: int, text: str) -> None:
        if index >= len(self.forms):
            self.forms.extend([""] * (index + 1 - len(self.forms)))
        self.forms[index] = text

    def commit(self) -> None:
        """Move the pending entry into the catalog and reset it.

        An entry with an empty msgid (the header, or nothing at all) is
        dropped; the pending context is kept for the next entry.
        """
        msgid, context = self.msgid, self.context
        translation = Translation(
            id=msgid, plural_id=self.plural_id, forms=tuple(self.forms)
        )
        self.msgid = ""
        self.plural_id = ""
        self.forms = []

        if not msgid:
            return

        self.context = ""
        if not context:
            self.translations[msgid] = translation
            return
        self.contexts.setdefault(context, {})[msgid] = translation


def parse_header_block(raw: str) -> Tuple[Dict[str, str], Optional[str]]:
    """Parse ``Key: value`` header lines.

    Keys are matched case-insensitively (stored lower-cased), values are
    trimmed, and lines starting with whitespace continue the previous
    value. Parsing stops at the first blank line.

    Args:
        raw: Header text taken from the msgstr of the empty msgid.

    Returns:
        Tuple of (fields parsed so far, error message or None). A line with
        no ``:`` stops parsing and is reported as an error.
    """
    fields: Dict[str, str] = {}
    last_key: Optional[str] = None
    for line in (raw + "\n\n").split("\n"):
        if not line.strip():
            break
        if line[0] in " \t":
            if last_key is None:
                return fields, f"malformed header continuation line: {line!r}"
            fields[last_key] = f"{fields[last_key]} {line.strip()}".strip()
            continue
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            return fields, f"malformed header line: {line!r}"
        last_key = key.strip().lower()
        # First occurrence wins
        fields.setdefault(last_key, value.strip())
    return fields, None


def parse_plural_forms(
    value: str,
) -> Tuple[int, Optional[PluralExpression], Optional[PluralExpressionError]]:
    """Parse a ``Plural-Forms`` header value.

    Args:
        value: e.g. ``"nplurals=2; plural=(n != 1);"``.

    Returns:
        Tuple of (nplurals, compiled formula or None, formula error or None).
        A non-numeric nplurals yields 0.
    """
    nplurals = 0
    expression = None
    error = None
    for assignment in value.split(";"):
        key, sep, raw = assignment.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key == "nplurals":
            try:
                nplurals = int(raw.strip())
            except ValueError:
                nplurals = 0
        elif key == "plural":
            try:
                expression = compile_plural(raw)
            except PluralExpressionError as e:
                expression = None
                error = e
    return nplurals, expression, error


class PoParser:
    """Parse .po buffers into Po catalogs.

    In lenient mode (the default) malformed lines and headers are logged
    and skipped. In strict mode the first problem raises PoParseError,
    which carries the partially built catalog.

    Example:
        parser = PoParser()
        po = parser.parse(Path("fr/LC_MESSAGES/default.po").read_bytes())
        po.get("Hello")
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse_file(self, path: Union[str, os.PathLike]) -> Po:
        """Read and parse a .po file.

        Raises:
            SourceNotFoundError: If the file cannot be read.
            PoParseError: In strict mode, on malformed content.
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise SourceNotFoundError(f"Failed to read .po file {path}: {e}") from e
        return self.parse(data)

    def parse_string(self, text: str) -> Po:
        """Parse .po content that is already decoded."""
        return self.parse(text)

    def parse(self, data: Union[bytes, str]) -> Po:
        """Parse .po content into a catalog.

        Args:
            data: Raw UTF-8 bytes or decoded text.

        Returns:
            The fully built Po catalog.

        Raises:
            PoParseError: In strict mode, on the first malformed line,
                undecodable input or malformed header.
        """
        state = _ParseState()
        text = self._decode(data, state)

        for line_number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.strip()
            try:
                self._dispatch(state, line)
            except _LineError as e:
                if self.strict:
                    raise PoParseError(
                        f"po: line {line_number}: {e}",
                        catalog=self._build(state),
                        line_number=line_number,
                        line=line,
                    ) from e
                logger.warning(
                    "po_line_skipped",
                    line_number=line_number,
                    line=line,
                    error=str(e),
                )

        state.commit()
        return self._build(state, raise_header_errors=self.strict)

    def _decode(self, data: Union[bytes, str], state: _ParseState) -> str:
        if isinstance(data, str):
            return data.lstrip("\ufeff")
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            if self.strict:
                raise PoParseError(
                    f"po: input is not valid UTF-8: {e}",
                    catalog=self._build(state),
                ) from e
            logger.warning("po_invalid_utf8", error=str(e))
            return data.decode("utf-8-sig", errors="replace")

    def _dispatch(self, state: _ParseState, line: str) -> None:
        # msgid_plural must be tested before its msgid prefix
        if line.startswith(MSGCTXT):
            state.commit()
            state.context = self._unquote(line[len(MSGCTXT):], "msgctxt")
        elif line.startswith(MSGID_PLURAL):
            state.plural_id = self._unquote(line[len(MSGID_PLURAL):], "msgid_plural")
        elif line.startswith(MSGID):
            state.commit()
            state.msgid = self._unquote(line[len(MSGID):], "msgid")
        elif line.startswith(MSGSTR):
            self._parse_msgstr(state, line[len(MSGSTR):].strip())
        elif len(line) >= 2 and line.startswith('"') and line.endswith('"'):
            self._parse_continuation(state, line)

    def _parse_msgstr(self, state: _ParseState, rest: str) -> None:
        if not rest.startswith("["):
            state.set_form(0, self._unquote(rest, "msgstr"))
            return

        close = rest.find("]")
        if close == -1:
            raise _LineError("could not find terminating ']' in msgstr index")
        match = _INDEX_RE.fullmatch(rest[: close + 1])
        if match is None:
            raise _LineError(f"invalid msgstr index {rest[1:close]!r}")
        index = int(match.group(1))
        state.set_form(index, self._unquote(rest[close + 1:], f"msgstr[{index}]"))

    def _parse_continuation(self, state: _ParseState, line: str) -> None:
        text = self._unquote(line, "multi-line string")
        if state.msgid:
            # Append to the last form; nothing to extend before the first msgstr
            if state.forms:
                state.forms[-1] += text
            return
        state.raw_header += text

    @staticmethod
    def _unquote(literal: str, what: str) -> str:
        try:
            return unquote(literal.strip())
        except QuotedStringError as e:
            raise _LineError(f"failed to unquote {what}: {e}") from e

    def _build(self, state: _ParseState, raise_header_errors: bool = False) -> Po:
        fields, header_error = parse_header_block(state.raw_header)
        language = fields.get("language", "")
        plural_forms = fields.get("plural-forms", "")
        nplurals, expression, plural_error = parse_plural_forms(plural_forms)

        po = Po(
            language=language,
            plural_forms=plural_forms,
            nplurals=nplurals,
            plural=expression,
            translations=state.translations,
            contexts=state.contexts,
        )

        if header_error is not None:
            if raise_header_errors:
                raise PoParseError(f"po: failed to parse header: {header_error}", catalog=po)
            logger.warning("po_header_malformed", error=header_error)

        if plural_error is not None:
            if raise_header_errors:
                raise PoParseError(
                    f"po: failed to parse Plural-Forms header: {plural_error}", catalog=po
                ) from plural_error
            logger.warning(
                "po_plural_forms_malformed",
                error=str(plural_error),
                plural_forms=plural_forms,
            )

        return po
