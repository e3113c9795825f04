"""
Errors raised by the catalog.

Substring misses while narrowing variants are not errors and never raise;
see ``CatalogResolver``.
"""


class ProductNotFound(Exception):
    """No active root product matches the requested permalink."""

    def __init__(self, permalink):
        self.permalink = permalink
        super().__init__(f"Product '{permalink}' not found")


class ImportFormatError(Exception):
    """The uploaded spreadsheet has an unknown extension or cannot be parsed."""

    def __init__(self, filename, reason=None):
        self.filename = filename
        self.reason = reason
        if reason:
            message = f"Unreadable spreadsheet {filename}: {reason}"
        else:
            message = f"Unknown spreadsheet format: {filename}"
        super().__init__(message)


class ProductImportError(Exception):
    """A spreadsheet row failed catalog validation; the import was rolled back."""

    def __init__(self, row_number, messages):
        self.row_number = row_number
        self.messages = messages
        super().__init__(f"Row {row_number}: {'; '.join(messages)}")
