"""gettext catalogs - .po parsing, plural forms and locale registries.

Main components:
- parser: PoParser turning .po bytes into immutable Po catalogs
- models: Po and Translation with plain, plural and contextual lookups
- plural: compiler/evaluator for Plural-Forms formulas
- locale: Locale (domains for one language) and NullLocale
- locale_set: LocaleSet (locales for many languages)
- sources: FileSystemSource and MemorySource byte sources
"""

from pogettext.i18n.errors import (
    DomainLoadError,
    DomainNotFoundError,
    GettextError,
    LocaleNotFoundError,
    PluralExpressionError,
    PoParseError,
    QuotedStringError,
    SourceNotFoundError,
)
from pogettext.i18n.locale import Locale, NullLocale
from pogettext.i18n.locale_set import LocaleSet
from pogettext.i18n.models import Po, Translation
from pogettext.i18n.parser import PoParser
from pogettext.i18n.plural import PluralExpression, compile_plural
from pogettext.i18n.sources import FileSystemSource, MemorySource, Source

__all__ = [
    "Po",
    "Translation",
    "PoParser",
    "PluralExpression",
    "compile_plural",
    "Locale",
    "NullLocale",
    "LocaleSet",
    "Source",
    "FileSystemSource",
    "MemorySource",
    "GettextError",
    "QuotedStringError",
    "PluralExpressionError",
    "PoParseError",
    "SourceNotFoundError",
    "DomainNotFoundError",
    "DomainLoadError",
    "LocaleNotFoundError",
]
