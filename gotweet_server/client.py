"""
Twitter API Client
Build an authenticated tweepy client and post tweets through it.
"""

from typing import Optional

from tweepy import Client

from .config import Config
from .logger import logger
from .tokens import Tokens


def create_client(tokens: Tokens, wait_on_rate_limit: Optional[bool] = None) -> Client:
    """
    Create a Twitter API client from a set of tokens.

    Args:
        tokens: Validated tokens (OAuth 1.0a user context)
        wait_on_rate_limit: Sleep through rate limits instead of failing
            (defaults to Config.WAIT_ON_RATE_LIMIT)
    """
    if wait_on_rate_limit is None:
        wait_on_rate_limit = Config.WAIT_ON_RATE_LIMIT
    return Client(
        consumer_key=tokens.consumer_key,
        consumer_secret=tokens.consumer_secret,
        access_token=tokens.access_token,
        access_token_secret=tokens.access_token_secret,
        wait_on_rate_limit=wait_on_rate_limit,
    )


class TweetPoster:
    """Posts plain text tweets. Shared read-only between request threads."""

    def __init__(self, client: Client, dry_run: Optional[bool] = None):
        self.client = client
        self.dry_run = Config.DRY_RUN if dry_run is None else dry_run

    def post(self, text: str):
        """
        Post a tweet with no extra options.

        Returns:
            Posted tweet data, or None in dry-run mode

        Raises:
            tweepy.TweepyException, requests.RequestException: posting failed
        """
        if self.dry_run:
            logger.info('[DRY_RUN] Would post: %s', text)
            return None
        resp = self.client.create_tweet(text=text)
        return resp.data
