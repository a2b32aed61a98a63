"""Error conditions surfaced by learning and matching passes."""


class DictionaryError(Exception):
    """Base class. ``code`` is stable and safe to expose to API clients."""

    code = "dictionary_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(DictionaryError, ValueError):
    """Operator input rejected before any processing."""

    code = "input_validation"


class TableParseError(DictionaryError):
    """Uploaded file could not be read as a workbook or CSV."""

    code = "parse_error"


class NoUsableDataError(DictionaryError):
    """Nothing to learn from, or nothing to match against."""

    code = "no_usable_data"
