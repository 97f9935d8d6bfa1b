"""Peppered token generator — the production code source.

A random token is hashed together with a server-side pepper, so codes carry
no sequence information even if the random source were weak.
"""

import hashlib
import secrets

from delivery.codes.port import CodeGenerator


def peppered(value: str, pepper: str) -> str:
    """Hex SHA-256 of ``"{pepper}:{value}"``."""
    return hashlib.sha256(f"{pepper}:{value}".encode("utf-8")).hexdigest()


class TokenCodeGenerator(CodeGenerator):
    def __init__(self, pepper: str = "", length: int = 12, prefix: str = "SHP"):
        self.pepper = pepper
        self.length = length
        self.prefix = prefix

    def generate(self) -> str:
        digest = peppered(secrets.token_urlsafe(16), self.pepper)
        return f"{self.prefix}-{digest[: self.length].upper()}"
