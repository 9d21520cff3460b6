"""Tests for token resolution and storage."""

import json
import os

import pytest

from gotweet_server.errors import ConfigurationError, TokenStorageError
from gotweet_server.tokens import ENV_VARS, Tokens, get_tokens, save_tokens

FULL_ENV = {
    "TWITTER_CONSUMER_KEY": "foo",
    "TWITTER_CONSUMER_SECRET": "foo",
    "TWITTER_ACCESS_TOKEN": "foo",
    "TWITTER_ACCESS_TOKEN_SECRET": "foo",
}


@pytest.fixture
def tokens_path(tmp_path):
    return str(tmp_path / "mockgotweetsettings")


def test_is_valid():
    """Tokens are valid only when all four are populated."""
    assert Tokens("a", "b", "c", "d").is_valid()
    assert not Tokens().is_valid()
    assert not Tokens("a", "b", "c", "").is_valid()
    assert not Tokens(consumer_secret="bar", access_token="baz").is_valid()


def test_no_env_no_file(tokens_path):
    """Without a file or environment, resolution fails."""
    with pytest.raises(ConfigurationError, match="could not retrieve tokens from environment"):
        get_tokens(tokens_path, environ={})


def test_partial_env_no_file(tokens_path):
    """An empty environment variable counts as missing."""
    env = dict(FULL_ENV, TWITTER_ACCESS_TOKEN="")
    with pytest.raises(ConfigurationError, match="could not retrieve tokens from environment"):
        get_tokens(tokens_path, environ=env)


def test_env_no_file(tokens_path):
    """Tokens come from the environment when no file exists."""
    env = {
        "TWITTER_CONSUMER_KEY": "ck",
        "TWITTER_CONSUMER_SECRET": "cs",
        "TWITTER_ACCESS_TOKEN": "at",
        "TWITTER_ACCESS_TOKEN_SECRET": "ats",
    }
    assert get_tokens(tokens_path, environ=env) == Tokens("ck", "cs", "at", "ats")


def test_env_defaults_to_process_environment(tokens_path, monkeypatch):
    """os.environ is used when no mapping is given."""
    for var, value in FULL_ENV.items():
        monkeypatch.setenv(var, value)
    assert get_tokens(tokens_path) == Tokens("foo", "foo", "foo", "foo")


def test_saved_tokens_round_trip(tokens_path):
    """Saved tokens resolve to exactly what was saved."""
    tokens = Tokens(
        consumer_key="foo",
        consumer_secret="bar",
        access_token="baz",
        access_token_secret="blah",
    )
    save_tokens(tokens, tokens_path)
    assert get_tokens(tokens_path, environ={}) == tokens


def test_file_wins_over_env(tokens_path):
    """A valid file is used even when the environment is populated."""
    tokens = Tokens("foo", "bar", "baz", "blah")
    save_tokens(tokens, tokens_path)
    assert get_tokens(tokens_path, environ=FULL_ENV) == tokens


def test_incomplete_file(tokens_path):
    """An incomplete file fails without falling back to the environment."""
    save_tokens(Tokens(consumer_secret="bar", access_token="baz"), tokens_path)
    with pytest.raises(ConfigurationError, match="could not retrieve all tokens from disk"):
        get_tokens(tokens_path, environ=FULL_ENV)


def test_file_missing_keys(tokens_path):
    """Keys absent from the file are treated as empty."""
    with open(tokens_path, "w") as fh:
        json.dump({"consumer_key": "foo", "extra": "ignored"}, fh)
    with pytest.raises(ConfigurationError, match="could not retrieve all tokens from disk"):
        get_tokens(tokens_path, environ=FULL_ENV)


@pytest.mark.parametrize("content", [
    b"not json",
    b"[1, 2]",
    b'{"consumer_key": 5}',
    b'{"consumer_key": "\xff\xfe"}',
])
def test_malformed_file(tokens_path, content):
    """Unparseable files, including invalid UTF-8, are configuration errors."""
    with open(tokens_path, "wb") as fh:
        fh.write(content)
    with pytest.raises(ConfigurationError):
        get_tokens(tokens_path, environ=FULL_ENV)


def test_unreadable_path(tmp_path):
    """Filesystem errors other than absence are storage errors."""
    with pytest.raises(TokenStorageError):
        get_tokens(str(tmp_path), environ=FULL_ENV)


def test_storage_error_is_ioerror():
    assert issubclass(TokenStorageError, IOError)


def test_save_format(tokens_path):
    """Tokens are stored as a JSON object with the four token fields."""
    save_tokens(Tokens("foo", "bar", "baz", "blah"), tokens_path)
    with open(tokens_path) as fh:
        data = json.load(fh)
    assert data == {
        "consumer_key": "foo",
        "consumer_secret": "bar",
        "access_token": "baz",
        "access_token_secret": "blah",
    }
    assert set(data) == set(ENV_VARS)


def test_save_overwrites_and_cleans_up(tmp_path, tokens_path):
    """Saving replaces the old file and leaves no temp files behind."""
    save_tokens(Tokens("a", "b", "c", "d"), tokens_path)
    save_tokens(Tokens("foo", "bar", "baz", "blah"), tokens_path)
    assert get_tokens(tokens_path, environ={}) == Tokens("foo", "bar", "baz", "blah")
    assert os.listdir(tmp_path) == ["mockgotweetsettings"]


def test_save_failure_leaves_file_untouched(tmp_path, tokens_path):
    """A failed write does not touch the existing file."""
    tokens = Tokens("foo", "bar", "baz", "blah")
    save_tokens(tokens, tokens_path)
    with pytest.raises(TokenStorageError):
        save_tokens(Tokens("a", "b", "c", "d"), tokens_path, tmp_dir=str(tmp_path / "missing"))
    assert get_tokens(tokens_path, environ={}) == tokens


def test_save_replace_failure(tmp_path, tokens_path, monkeypatch):
    """A failed rename removes the temp file and raises a storage error."""
    def broken_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(TokenStorageError, match="rename failed"):
        save_tokens(Tokens("foo", "bar", "baz", "blah"), tokens_path)
    assert os.listdir(tmp_path) == []
