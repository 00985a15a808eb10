"""GNU gettext .po catalogs with plural forms and message contexts."""
