"""Session-scoped key/token dictionary."""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)

UNKNOWN_PREFIX = "UNKNOWN_"
TOKEN_MIN_WIDTH = 2


def format_token(token_id: int) -> str:
    """Format a counter value as a token, zero-padded to at least two digits."""
    return f"{token_id:0{TOKEN_MIN_WIDTH}d}"


@dataclass(frozen=True)
class DictionarySnapshot:
    """Read-only copy of a dictionary's two mappings."""

    key_to_token: Mapping[str, str]
    token_to_key: Mapping[str, str]


class TokenDictionary:
    """
    Bidirectional mapping between JSON object keys and short numeric tokens.

    Tokens are minted on first use from a monotonically increasing counter and
    are never reassigned. Only the encoder mints; the decoder only looks up.

    Args:
        initial: Optional seed mapping of key -> token. The counter starts one
            past the largest numeric token in the seed.
    """

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._key_to_token: dict[str, str] = {}
        self._token_to_key: dict[str, str] = {}
        self._lock = threading.Lock()

        for key, token in (initial or {}).items():
            if token in self._token_to_key:
                raise ValueError(
                    f"Token {token!r} is bound to both {self._token_to_key[token]!r} and {key!r}"
                )
            self._key_to_token[key] = token
            self._token_to_key[token] = key

        numeric = [int(t) for t in self._token_to_key if t.isascii() and t.isdigit()]
        self._next_token_id = max(numeric) + 1 if numeric else 1

    @property
    def next_token_id(self) -> int:
        return self._next_token_id

    def __len__(self) -> int:
        return len(self._key_to_token)

    def __contains__(self, key: object) -> bool:
        return key in self._key_to_token

    def __repr__(self) -> str:
        return f"TokenDictionary(size={len(self)}, next_token_id={self._next_token_id})"

    def token_for(self, key: str) -> str:
        """Return the token for ``key``, minting a new one on first use."""
        token = self._key_to_token.get(key)
        if token is not None:
            return token

        with self._lock:
            # Another thread may have minted it while we waited
            token = self._key_to_token.get(key)
            if token is not None:
                return token

            token = format_token(self._next_token_id)
            self._key_to_token[key] = token
            self._token_to_key[token] = key
            self._next_token_id += 1

        logger.debug("Minted token %s for key %r", token, key)
        return token

    def key_for(self, token: str) -> str:
        """Return the key for ``token``, or ``UNKNOWN_<token>`` if it was never minted."""
        key = self._token_to_key.get(token)
        if key is None:
            logger.debug("No key registered for token %r", token)
            return f"{UNKNOWN_PREFIX}{token}"
        return key

    def snapshot(self) -> DictionarySnapshot:
        """Copy both mappings into read-only views."""
        with self._lock:
            return DictionarySnapshot(
                key_to_token=MappingProxyType(dict(self._key_to_token)),
                token_to_key=MappingProxyType(dict(self._token_to_key)),
            )
