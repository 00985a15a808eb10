"""Translation catalog models.

Defines the immutable data structures produced by the .po parser and the
lookup operations served from them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from pogettext.i18n.formatting import format_message
from pogettext.i18n.plural import PluralExpression, plural_form_index


@dataclass(frozen=True)
class Translation:
    """One source phrase and its translated forms.

    Attributes:
        id: Singular source string (msgid). Never empty.
        plural_id: Plural source string (msgid_plural), empty if none.
        forms: Translated strings by plural index; index 0 is the singular.
            Slots never written by the .po file hold empty strings.
    """

    id: str
    plural_id: str = ""
    forms: Tuple[str, ...] = ()

    def form(self, index: int) -> Optional[str]:
        """Return the form at ``index``, or None if it was never translated."""
        if 0 <= index < len(self.forms) and self.forms[index]:
            return self.forms[index]
        return None

    def get(self) -> str:
        """Return the singular translation, falling back to the msgid."""
        text = self.form(0)
        return text if text is not None else self.id

    def get_n(self, index: int, fallback: str) -> str:
        """Return the plural form at ``index``.

        Falls back to the entry's own msgid_plural, then to ``fallback``.
        """
        text = self.form(index)
        if text is not None:
            return text
        return self.plural_id or fallback


@dataclass(frozen=True)
class Po:
    """Parsed catalog for one .po buffer.

    Instances are immutable once built, so they can be shared between
    threads without locking.

    Attributes:
        language: Value of the ``Language`` header (advisory).
        plural_forms: Raw ``Plural-Forms`` header value.
        nplurals: Declared plural count, 0 if absent or malformed.
        plural: Compiled plural formula, None if absent or malformed.
        translations: msgid -> Translation for the default context.
        contexts: msgctxt -> (msgid -> Translation).
    """

    language: str = ""
    plural_forms: str = ""
    nplurals: int = 0
    plural: Optional[PluralExpression] = None
    translations: Mapping[str, Translation] = field(default_factory=dict)
    contexts: Mapping[str, Mapping[str, Translation]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "translations", MappingProxyType(dict(self.translations))
        )
        object.__setattr__(
            self,
            "contexts",
            MappingProxyType(
                {
                    name: MappingProxyType(dict(entries))
                    for name, entries in self.contexts.items()
                }
            ),
        )

    def __len__(self) -> int:
        return len(self.translations) + sum(len(c) for c in self.contexts.values())

    def find(self, msgid: str, context: Optional[str] = None) -> Optional[Translation]:
        """Return the stored Translation for ``msgid``, or None."""
        if context is None:
            return self.translations.get(msgid)
        return self.contexts.get(context, {}).get(msgid)

    def plural_form(self, n: int) -> int:
        """Return the plural-form index for ``n``; 0 on any failure."""
        return plural_form_index(self.plural, self.nplurals, n)

    def get(self, msgid: str, *args: Any) -> str:
        """Translate ``msgid`` and format it with ``args``."""
        return self._resolve(self.find(msgid), msgid, args)

    def get_n(self, msgid: str, plural: str, n: int, *args: Any) -> str:
        """Translate the plural form of ``msgid`` selected by ``n``."""
        return self._resolve_n(self.find(msgid), plural, n, args)

    def get_c(self, msgid: str, context: str, *args: Any) -> str:
        """Translate ``msgid`` within ``context``."""
        return self._resolve(self.find(msgid, context), msgid, args)

    def get_nc(self, msgid: str, plural: str, n: int, context: str, *args: Any) -> str:
        """Translate the plural form of ``msgid`` within ``context``."""
        return self._resolve_n(self.find(msgid, context), plural, n, args)

    def _resolve(self, translation: Optional[Translation], msgid: str, args) -> str:
        text = translation.get() if translation is not None else msgid
        return format_message(text, args)

    def _resolve_n(
        self, translation: Optional[Translation], plural: str, n: int, args
    ) -> str:
        if translation is None:
            return format_message(plural, args)
        return format_message(translation.get_n(self.plural_form(n), plural), args)
