# src/tasktrack/auth/credentials.py

from __future__ import annotations


class PlaintextCredentials:
    """
    Stores the password as given and compares by exact equality.

    This is the original application's behaviour and is NOT secure. It sits
    behind the CredentialVerifier port so a hashing scheme can replace it
    without touching AuthManager.
    """

    def encode(self, password: str) -> str:
        return password

    def verify(self, stored: str, supplied: str) -> bool:
        # str equality: any Python string is comparable, lone surrogates included
        return stored == supplied
