"""Exceptions raised while talking to API-Football."""


class APISportsError(Exception):
    """Custom exception for API-Sports / API-FOOTBALL errors."""


class APINetworkError(APISportsError):
    """Connection failure before a response arrived."""


class APITimeoutError(APINetworkError):
    pass


class APIStatusError(APISportsError):
    """Non-200 response, or a 200 carrying API-level errors."""


class APIDecodeError(APISportsError):
    """Body or fixture entry doesn't match the expected shape."""
