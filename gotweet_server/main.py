"""
gotweet-server entry point.

Usage:
    gotweet-server                       # serve on $PORT (default 4000)
    gotweet-server --port 8080
    gotweet-server --tokens-file ./tokens.json --dry-run
"""
import argparse
import socket
import sys
from typing import Optional

from werkzeug.serving import make_server, select_address_family

from .client import TweetPoster, create_client
from .config import Config
from .errors import GotweetError
from .logger import logger
from .relay import create_app
from .tokens import get_tokens, save_tokens


def build_app(tokens_path: Optional[str] = None, dry_run: Optional[bool] = None):
    """Resolve tokens, flush them to disk and wire up the relay app."""
    tokens = get_tokens(tokens_path)

    # Flush state to disk.
    save_tokens(tokens, tokens_path)

    poster = TweetPoster(create_client(tokens), dry_run=dry_run)
    return create_app(poster)


def run(port: Optional[int] = None, tokens_path: Optional[str] = None, dry_run: Optional[bool] = None):
    """Start serving. Any startup failure exits the process with status 1."""
    if port is None:
        try:
            port = int(Config.PORT)
        except ValueError:
            logger.error('Invalid PORT: %r', Config.PORT)
            sys.exit(1)

    try:
        app = build_app(tokens_path, dry_run=dry_run)
    except GotweetError as e:
        logger.error('%s', e)
        sys.exit(1)

    # werkzeug exits on its own when it cannot bind, so bind here first
    try:
        sock = socket.create_server((Config.HOST, port), family=select_address_family(Config.HOST, port))
    except OSError as e:
        logger.error('Error serving traffic: %s', e)
        sys.exit(1)

    server = make_server(Config.HOST, port, app, threaded=True, fd=sock.fileno())
    sock.close()
    logger.info('Serving traffic on port %s', port)
    try:
        server.serve_forever()
    finally:
        server.server_close()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Post HTTP request bodies to Twitter')
    parser.add_argument('--port', type=int, default=None, help='Port to listen on (default: $PORT or 4000)')
    parser.add_argument('--tokens-file', default=None, help=f'Tokens file (default: {Config.TOKENS_PATH})')
    parser.add_argument('--dry-run', action='store_true', default=None, help='Log tweets instead of posting them')

    args = parser.parse_args(argv)
    run(port=args.port, tokens_path=args.tokens_file, dry_run=args.dry_run)


if __name__ == '__main__':
    main()
