"""Custom exceptions for the odds scraping pipeline.

Only ``FetchError`` ever escapes a scrape cycle boundary; the parse errors
are raised internally and resolved to safe defaults by their callers.
"""


class ScraperError(Exception):
    """Base exception for all scraper errors."""

    pass


class FetchError(ScraperError):
    """Raised when the page could not be loaded, waited on, or captured."""

    def __init__(self, message: str, url: str | None = None, timed_out: bool = False):
        self.url = url
        self.timed_out = timed_out
        super().__init__(message)


class MarkupParseError(ScraperError):
    """Raised when rendered markup cannot be parsed as a document."""

    pass


class OddsParseError(ScraperError):
    """Raised when odds or line text is not a number."""

    def __init__(self, message: str, text: str | None = None):
        self.text = text
        super().__init__(message)


class ConfigurationError(ScraperError):
    """Raised for configuration-related errors."""

    pass
