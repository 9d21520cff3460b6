"""
gotweet-server - HTTP to Twitter bridge
POST a request body to /tweet and it is posted as a tweet.
"""

__version__ = "0.1.0"
__author__ = "Developer"

from .client import TweetPoster, create_client
from .errors import ConfigurationError, TokenStorageError
from .relay import create_app
from .tokens import Tokens, get_tokens, save_tokens

__all__ = [
    "Tokens",
    "get_tokens",
    "save_tokens",
    "create_client",
    "TweetPoster",
    "create_app",
    "ConfigurationError",
    "TokenStorageError",
]
