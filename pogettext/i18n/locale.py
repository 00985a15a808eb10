"""Per-language collection of translation domains.

A Locale maps domain names to immutable Po catalogs. Loading parses
outside the registry lock and swaps the finished catalog in under the
write lock; lookups hold the read lock only while fetching the catalog
reference.
"""

from typing import Any, Dict, List, Optional

from pogettext.core.logging import get_module_logger
from pogettext.i18n.errors import (
    DomainLoadError,
    DomainNotFoundError,
    PoParseError,
    SourceNotFoundError,
)
from pogettext.i18n.formatting import format_message
from pogettext.i18n.models import Po
from pogettext.i18n.parser import PoParser
from pogettext.i18n.rwlock import ReadWriteLock
from pogettext.i18n.sources import FileSystemSource, MemorySource, Source

logger = get_module_logger()

DEFAULT_DOMAIN = "default"


def candidate_paths(language: str, domain: str) -> List[str]:
    """List the source identifiers tried for ``domain``, in order.

    ``fr_CA`` falls back to ``fr``; both ``LC_MESSAGES`` and flat layouts
    are accepted.
    """
    filename = f"{domain}.po"
    short = language[:2] if len(language) > 2 else None
    paths = [f"{language}/LC_MESSAGES/{filename}"]
    if short:
        paths.append(f"{short}/LC_MESSAGES/{filename}")
    paths.append(f"{language}/{filename}")
    if short:
        paths.append(f"{short}/{filename}")
    return paths


class Locale:
    """All translation domains loaded for one language.

    Safe for concurrent use: any number of threads may look up strings
    while another loads or reloads a domain.

    Attributes:
        language: Language code used to locate .po files (e.g. "fr_CA").
        source: Byte source the .po files are read from.
        default_domain: Domain used by the unsuffixed lookup methods.
        strict: Whether .po files are parsed in strict mode.

    Example:
        locale = Locale("fr", source=FileSystemSource("locales"))
        locale.add_domain("default")
        locale.get_n("One item", "%d items", 3, 3)
    """

    def __init__(
        self,
        language: str,
        source: Optional[Source] = None,
        default_domain: str = DEFAULT_DOMAIN,
        strict: bool = False,
    ):
        self.language = language
        self.source = source if source is not None else FileSystemSource(".")
        self.default_domain = default_domain
        self.strict = strict
        self._domains: Dict[str, Optional[Po]] = {}
        self._lock = ReadWriteLock()
        self.log = logger.bind(language=language)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(language={self.language!r})"

    def _read_domain_file(self, domain: str) -> bytes:
        for path in candidate_paths(self.language, domain):
            try:
                return self.source.read_file(path)
            except SourceNotFoundError:
                continue
        raise DomainNotFoundError(
            f"No .po file found for domain {domain!r} (locale {self.language!r})"
        )

    def add_domain(self, domain: str) -> Po:
        """Load ``domain`` from the source, replacing any loaded version.

        Args:
            domain: Domain name; the file ``<domain>.po`` is looked up.

        Returns:
            The newly installed catalog.

        Raises:
            DomainNotFoundError: If no file exists for the domain.
            DomainLoadError: If strict parsing rejected the file. The
                previously loaded catalog, if any, stays in place.
        """
        data = self._read_domain_file(domain)
        try:
            po = PoParser(strict=self.strict).parse(data)
        except PoParseError as e:
            self.log.error("domain_load_failed", domain=domain, error=str(e))
            raise DomainLoadError(
                f"Failed to parse domain {domain!r} for locale {self.language!r}: {e}"
            ) from e

        self.set_domain(domain, po)
        self.log.info(
            "domain_loaded",
            domain=domain,
            entry_count=len(po),
            nplurals=po.nplurals,
        )
        return po

    def set_domain(self, domain: str, po: Optional[Po]) -> None:
        """Install an already-built catalog for ``domain``."""
        with self._lock.write_locked():
            self._domains[domain] = po

    def get_catalog(self, domain: Optional[str] = None) -> Optional[Po]:
        """Return the catalog for ``domain`` (default domain if None)."""
        with self._lock.read_locked():
            return self._domains.get(domain or self.default_domain)

    def has_domain(self, domain: str) -> bool:
        with self._lock.read_locked():
            return self._domains.get(domain) is not None

    def domains(self) -> List[str]:
        """Return the names of loaded domains, sorted."""
        with self._lock.read_locked():
            return sorted(name for name, po in self._domains.items() if po is not None)

    def get(self, msgid: str, *args: Any) -> str:
        return self.get_d(self.default_domain, msgid, *args)

    def get_n(self, msgid: str, plural: str, n: int, *args: Any) -> str:
        return self.get_nd(self.default_domain, msgid, plural, n, *args)

    def get_d(self, domain: str, msgid: str, *args: Any) -> str:
        """Translate ``msgid`` in ``domain``."""
        po = self.get_catalog(domain)
        if po is None:
            return format_message(msgid, args)
        return po.get(msgid, *args)

    def get_nd(self, domain: str, msgid: str, plural: str, n: int, *args: Any) -> str:
        """Translate the plural form of ``msgid`` selected by ``n`` in ``domain``."""
        po = self.get_catalog(domain)
        if po is None:
            return format_message(plural, args)
        return po.get_n(msgid, plural, n, *args)

    def get_c(self, msgid: str, context: str, *args: Any) -> str:
        return self.get_dc(self.default_domain, msgid, context, *args)

    def get_nc(self, msgid: str, plural: str, n: int, context: str, *args: Any) -> str:
        return self.get_ndc(self.default_domain, msgid, plural, n, context, *args)

    def get_dc(self, domain: str, msgid: str, context: str, *args: Any) -> str:
        """Translate ``msgid`` within ``context`` in ``domain``."""
        po = self.get_catalog(domain)
        if po is None:
            return format_message(msgid, args)
        return po.get_c(msgid, context, *args)

    def get_ndc(
        self,
        domain: str,
        msgid: str,
        plural: str,
        n: int,
        context: str,
        *args: Any,
    ) -> str:
        """Translate the contextual plural form of ``msgid`` in ``domain``."""
        po = self.get_catalog(domain)
        if po is None:
            return format_message(plural, args)
        return po.get_nc(msgid, plural, n, context, *args)


class NullLocale(Locale):
    """A Locale without domains; every lookup returns the source string."""

    def __init__(self, language: str = ""):
        super().__init__(language, source=MemorySource())

    def add_domain(self, domain: str) -> Po:
        raise DomainNotFoundError(f"NullLocale cannot load domain {domain!r}")

    def set_domain(self, domain: str, po: Optional[Po]) -> None:
        raise DomainLoadError("NullLocale does not hold domains")
