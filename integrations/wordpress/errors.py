"""Exceptions raised by the WordPress API client."""


class WordPressError(Exception):
    """Base class for WordPress client failures."""


class WordPressAPIError(WordPressError):
    """A backend call failed, either with a non-2xx answer or before one arrived.

    ``status_code`` is None for transport failures (DNS, refused connection,
    timeout) and for unparseable bodies.
    """

    def __init__(
        self,
        message: str,
        surface: str = "WordPress",
        status_code: int | None = None,
        reason: str = "",
        body: str = "",
    ):
        super().__init__(message)
        self.surface = surface
        self.status_code = status_code
        self.reason = reason
        self.body = body

    @classmethod
    def from_response(cls, surface: str, status_code: int, reason: str, body: str) -> "WordPressAPIError":
        return cls(
            f"{surface} API error: {status_code} {reason} - {body}",
            surface=surface,
            status_code=status_code,
            reason=reason,
            body=body,
        )


class PluginDirectoryError(WordPressError):
    """Every plugin directory search strategy failed."""

    def __init__(self, failures: list[str]):
        self.failures = failures
        super().__init__(failures[-1] if failures else "Failed to search WordPress.org plugins")
