"""Exceptions raised while resolving and storing Twitter tokens."""


class GotweetError(Exception):
    """Base error for the gotweet server."""
    pass


class ConfigurationError(GotweetError):
    """Tokens are missing, incomplete or malformed."""
    pass


class TokenStorageError(GotweetError, IOError):
    """The tokens file could not be read or written."""
    pass
