from __future__ import annotations


class ConfigurationError(RuntimeError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.status_code = 500


class InvalidTokenError(RuntimeError):
    pass


class TokenExchangeError(RuntimeError):
    pass
