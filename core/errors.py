"""Exceptions shared across layers"""


class ConfigurationError(Exception):
    """Required configuration for an enabled upstream is missing"""
    def __init__(self, message: str, code: str = "CONFIGURATION_MISSING"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidVideoUrlError(Exception):
    """Submitted URL is empty or not a TikTok link"""
    def __init__(self, message: str, code: str = "INVALID_URL"):
        self.message = message
        self.code = code
        super().__init__(message)
