"""
Token Module
Resolve Twitter tokens from disk or the environment and flush them to disk.
"""

import json
import os
import tempfile
from typing import Mapping, NamedTuple, Optional

from .config import Config
from .errors import ConfigurationError, TokenStorageError
from .logger import logger

ENV_VARS = {
    "consumer_key": "TWITTER_CONSUMER_KEY",
    "consumer_secret": "TWITTER_CONSUMER_SECRET",
    "access_token": "TWITTER_ACCESS_TOKEN",
    "access_token_secret": "TWITTER_ACCESS_TOKEN_SECRET",
}


class Tokens(NamedTuple):
    """All the tokens needed to use a Twitter client.

    May be written to disk in order to remove secrets from the environment.
    """

    consumer_key: str = ""  # API key
    consumer_secret: str = ""  # API secret
    access_token: str = ""
    access_token_secret: str = ""

    def is_valid(self) -> bool:
        """True if every token is populated."""
        return all(self)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "Tokens":
        """Populate tokens from the environment; unset variables are empty."""
        if environ is None:
            environ = os.environ
        return cls(**{field: environ.get(var, "") for field, var in ENV_VARS.items()})

    @classmethod
    def from_dict(cls, data) -> "Tokens":
        """Decode a stored record, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigurationError("tokens on disk are not a JSON object")
        values = {}
        for field in cls._fields:
            value = data.get(field)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ConfigurationError(f"token {field!r} on disk is not a string")
            values[field] = value
        return cls(**values)

    def to_dict(self) -> dict:
        return dict(self._asdict())


def get_tokens(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Tokens:
    """
    Resolve tokens, first from the file at `path`, then from the environment.

    The environment is only consulted when the file does not exist. Returned
    tokens are always valid.

    Args:
        path: Tokens file (defaults to Config.TOKENS_PATH)
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigurationError: tokens are missing, incomplete or malformed
        TokenStorageError: the file exists but could not be read
    """
    path = path or Config.TOKENS_PATH
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except FileNotFoundError:
        logger.debug("No tokens file at %s, reading tokens from environment", path)
        tokens = Tokens.from_environment(environ)
        if not tokens.is_valid():
            raise ConfigurationError("could not retrieve tokens from environment")
        return tokens
    except OSError as e:
        raise TokenStorageError(f"could not read tokens from {path}: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"tokens file {path} is malformed: {e}") from e

    tokens = Tokens.from_dict(data)
    if not tokens.is_valid():
        raise ConfigurationError("could not retrieve all tokens from disk")
    logger.debug("Loaded tokens from %s", path)
    return tokens


def save_tokens(tokens: Tokens, path: Optional[str] = None, tmp_dir: Optional[str] = None):
    """
    Write tokens to disk atomically.

    The record is written to a temp file and then renamed over `path`, so
    readers see either the old file or the new one. The temp file lives beside
    `path` unless `tmp_dir` says otherwise; it must share a filesystem with it.

    Raises:
        TokenStorageError: encoding, writing or replacing failed. `path` is
            left untouched.
    """
    path = path or Config.TOKENS_PATH
    if tmp_dir is None:
        tmp_dir = os.path.dirname(os.path.abspath(path))

    try:
        payload = json.dumps(tokens.to_dict())
    except (TypeError, ValueError) as e:
        raise TokenStorageError(f"could not encode tokens: {e}") from e

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".gotweet-", suffix=".tmp", dir=tmp_dir)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise TokenStorageError(f"could not save tokens to {path}: {e}") from e

    logger.info("Saved tokens to %s", path)
