"""
Tweet relay: POST /tweet posts the raw request body to Twitter.

A failed post is fatal to the whole process. There is no per-request error
response; `on_fatal` decides how the process goes down.
"""
import os

import requests
import tweepy
from flask import Flask, request

from .logger import logger

POST_ERRORS = (tweepy.TweepyException, requests.RequestException)


def _exit_process(exc):
    logger.critical('Post failed, shutting down: %s', exc)
    # sys.exit would only end the request thread
    os._exit(1)


def create_app(poster, on_fatal=None) -> Flask:
    """Build the relay app around a TweetPoster (anything with .post(text))."""
    app = Flask(__name__)
    fatal = on_fatal or _exit_process

    @app.route('/tweet', methods=['POST'])
    def tweet_post():
        """Post the string body of the request to Twitter."""
        text = request.get_data(as_text=True)
        logger.info('Received request body to POST: %s', text)
        try:
            tweet = poster.post(text)
        except POST_ERRORS as e:
            logger.exception('Error posting tweet')
            fatal(e)
            raise
        except Exception as e:
            logger.exception('Unexpected error posting tweet')
            fatal(e)
            raise
        logger.info('Posted Tweet: %s', tweet)
        return '', 200

    return app
