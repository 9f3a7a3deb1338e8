"""Keep API tokens out of log output."""

import logging
import os
import re

_TOKEN_ENV_VAR = "HCLOUD_TOKEN"
_MIN_TOKEN_LENGTH = 8

_tokens: set[str] = set()


def register_secret(value: str | None):
    """Mask *value* in every log record emitted from now on."""
    if value and len(value) >= _MIN_TOKEN_LENGTH:
        _tokens.add(value)


def _known_tokens() -> list[str]:
    tokens = set(_tokens)
    env_token = os.environ.get(_TOKEN_ENV_VAR, "")
    if len(env_token) >= _MIN_TOKEN_LENGTH:
        tokens.add(env_token)
    return sorted(tokens, key=len, reverse=True)


class SecretRedactingFilter(logging.Filter):
    """Formats each record once and replaces known tokens in it with '***'."""

    def filter(self, record: logging.LogRecord) -> bool:
        tokens = _known_tokens()
        if tokens:
            pattern = re.compile("|".join(re.escape(t) for t in tokens))
            record.msg = pattern.sub("***", record.getMessage())
            record.args = None
        return True
