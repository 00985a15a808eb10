"""Shared fixtures for the pogettext test suite."""

import pytest

from tests.factories.po import make_entry, make_header, make_po_text

PLURAL_EXAMPLE_PO = """msgid ""
msgstr ""
"Plural-Forms: nplurals=2; plural=(n != 1);\\n"

msgid "One item"
msgid_plural "%d items"
msgstr[0] "One item"
msgstr[1] "%d items"
"""


@pytest.fixture
def plural_example_po():
    """Minimal catalog with a two-form English plural entry."""
    return PLURAL_EXAMPLE_PO


@pytest.fixture
def french_po_text():
    """French catalog exercising plain, plural, context and multi-line entries."""
    return make_po_text(
        [
            make_entry("Hello", "Bonjour"),
            make_entry("Hello %s", "Bonjour %s"),
            make_entry(
                "apple", msgid_plural="apples", forms=["pomme", "pommes"]
            ),
            make_entry("File", "Fichier", msgctxt="menu"),
            make_entry("File", "Déposer", msgctxt="button"),
            'msgid "Long"\nmsgstr "Une phrase "\n"sur deux lignes"\n',
            make_entry("Untranslated", ""),
        ],
        header=make_header(language="fr", plural_forms="nplurals=2; plural=(n > 1);"),
    )


@pytest.fixture
def locales_dir(tmp_path, french_po_text):
    """Locale tree with fr (LC_MESSAGES layout) and de (flat layout).

    Returns a directory structure like:
    - fr/LC_MESSAGES/default.po
    - fr/LC_MESSAGES/errors.po
    - de/default.po
    """
    fr_dir = tmp_path / "fr" / "LC_MESSAGES"
    fr_dir.mkdir(parents=True)
    (fr_dir / "default.po").write_text(french_po_text, encoding="utf-8")
    (fr_dir / "errors.po").write_text(
        make_po_text([make_entry("Not found", "Introuvable")]), encoding="utf-8"
    )

    de_dir = tmp_path / "de"
    de_dir.mkdir()
    (de_dir / "default.po").write_text(
        make_po_text(
            [make_entry("Hello", "Hallo")],
            header=make_header(language="de"),
        ),
        encoding="utf-8",
    )
    return tmp_path
