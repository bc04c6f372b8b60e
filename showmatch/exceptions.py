"""
Custom exception classes for Show Matcher
Raised only at the host seams; the matching core itself never raises
"""


class ShowMatchError(Exception):
    """Base exception for all Show Matcher errors"""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary for structured output"""
        result = {"error": self.__class__.__name__, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class CandidateLookupError(ShowMatchError):
    """Raised by a candidate source when a show search fails"""

    def __init__(self, query: str, reason: str | None = None):
        message = f"Candidate lookup failed for: {query}"
        details = reason or "Provider unavailable or returned an invalid response"
        super().__init__(message, details)
        self.query = query
        self.reason = reason


class InvalidInputError(ShowMatchError):
    """Raised when a candidate or episode row file cannot be read"""

    def __init__(self, path: str, reason: str | None = None):
        message = f"Invalid input file: {path}"
        details = reason or "Expected a JSON document in the documented shape"
        super().__init__(message, details)
        self.path = path
        self.reason = reason


class ConfigurationError(ShowMatchError):
    """Raised when configuration is invalid"""

    def __init__(self, config_key: str, reason: str | None = None):
        message = f"Invalid configuration: {config_key}"
        details = reason or "Please check your configuration settings"
        super().__init__(message, details)
        self.config_key = config_key


class SelectionError(ShowMatchError):
    """Raised when a user choice names an id that is not a known candidate"""

    def __init__(self, query: str, candidate_id: str):
        message = f"Unknown candidate id '{candidate_id}' for: {query}"
        details = "Pick one of the ids listed for this show name"
        super().__init__(message, details)
        self.query = query
        self.candidate_id = candidate_id
