"""Test data factories for .po catalogs.

Provides deterministic builders for:
- .po file text
- Translation entries
- Po catalogs
"""

from typing import Dict, Iterable, Optional, Sequence

from pogettext.i18n import Po, PoParser, Translation

PLURAL_FORMS_EN = "nplurals=2; plural=(n != 1);"


def _quote(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def make_header(
    language: str = "fr",
    plural_forms: Optional[str] = PLURAL_FORMS_EN,
    extra: Optional[Dict[str, str]] = None,
) -> str:
    """Build the header entry (empty msgid) of a .po file.

    Args:
        language: Language header value; omitted when empty.
        plural_forms: Plural-Forms header value; omitted when None.
        extra: Additional header fields.

    Returns:
        .po text for the header entry.
    """
    fields = {"Content-Type": "text/plain; charset=UTF-8"}
    if language:
        fields["Language"] = language
    if plural_forms is not None:
        fields["Plural-Forms"] = plural_forms
    fields.update(extra or {})

    lines = ['msgid ""', 'msgstr ""']
    lines.extend(_quote(f"{key}: {value}\n") for key, value in fields.items())
    return "\n".join(lines) + "\n"


def make_entry(
    msgid: str,
    msgstr: Optional[str] = None,
    msgid_plural: Optional[str] = None,
    forms: Optional[Sequence[str]] = None,
    msgctxt: Optional[str] = None,
) -> str:
    """Build one .po entry.

    Args:
        msgid: Source string.
        msgstr: Singular translation (ignored when forms is given).
        msgid_plural: Plural source string.
        forms: Plural translations written as msgstr[0..N].
        msgctxt: Optional context.

    Returns:
        .po text for the entry.
    """
    lines = []
    if msgctxt is not None:
        lines.append(f"msgctxt {_quote(msgctxt)}")
    lines.append(f"msgid {_quote(msgid)}")
    if msgid_plural is not None:
        lines.append(f"msgid_plural {_quote(msgid_plural)}")
    if forms is not None:
        lines.extend(f"msgstr[{i}] {_quote(form)}" for i, form in enumerate(forms))
    else:
        lines.append(f"msgstr {_quote(msgstr or '')}")
    return "\n".join(lines) + "\n"


def make_po_text(entries: Iterable[str] = (), header: Optional[str] = None) -> str:
    """Join a header and entries into a .po document."""
    if header is None:
        header = make_header()
    return "\n".join([header, *entries])


def make_po(entries: Iterable[str] = (), header: Optional[str] = None) -> Po:
    """Parse a generated .po document leniently."""
    return PoParser().parse(make_po_text(entries, header))


def make_translation(
    msgid: str = "apple",
    plural_id: str = "",
    forms: Sequence[str] = ("pomme",),
) -> Translation:
    """Create a Translation instance."""
    return Translation(id=msgid, plural_id=plural_id, forms=tuple(forms))
