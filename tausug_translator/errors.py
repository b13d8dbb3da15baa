from __future__ import annotations


class TranslatorError(Exception):
    """Base class for recoverable translator failures."""

    code = "translator_error"

    def __init__(self, message: str = "", *, code: str | None = None):
        super().__init__(message or self.code)
        if code:
            self.code = code


class ResourceUnavailableError(TranslatorError):
    code = "resource_unavailable"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not load {url}: {reason}")
        self.url = url
        self.reason = reason


class DictionaryFormatError(TranslatorError):
    code = "invalid_format"


class WordInputError(TranslatorError):
    code = "invalid_input"


class UnsupportedLanguageError(TranslatorError):
    code = "unsupported_language"

    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language!r}")
        self.language = language


class StorageWriteError(TranslatorError):
    code = "storage_unavailable"

    def __init__(self, path, reason: str):
        super().__init__(f"Could not save {path}: {reason}")
        self.path = path
        self.reason = reason
