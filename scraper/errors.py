"""Errors raised while scraping the lunch page.

Every stage raises a subclass of ``ScraperError``; ``str(exc)`` is the
message shown to the user when there is no cached data to fall back on.
"""



class ScraperError(Exception):
    """Base class for all scrape failures."""

    message = "Scraping failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ScrapeTimeoutError(ScraperError):
    """No result within the configured timeout."""

    message = "Request timed out. Please check your internet connection."

    def describe(self) -> str:
        return self.message


class NetworkError(ScraperError):
    """The page failed to load (DNS, TLS, connection, aborted navigation)."""

    message = "Network error"


class ScriptEvaluationError(ScraperError):
    """Evaluating the DOM snapshot script in the page failed."""

    message = "Failed to parse page"


class ParsingError(ScraperError):
    """Extractor output was not valid serialized data."""

    message = "Failed to parse restaurant data"

    def describe(self) -> str:
        return self.message


class DecodingError(ScraperError):
    """Extractor output had the wrong shape."""

    message = "Failed to decode data"
