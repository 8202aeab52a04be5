"""API key storage, injected into the review engine at call time."""

import logging
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values, set_key, unset_key


class CredentialStore(Protocol):
    """A single named secret."""

    def get(self) -> str | None: ...

    def save(self, value: str) -> None: ...

    def remove(self) -> None: ...

    def has(self) -> bool: ...


class MemoryCredentialStore:
    """Keeps the secret in memory only."""

    def __init__(self, value: str | None = None):
        self.value = value

    def get(self) -> str | None:
        return self.value

    def save(self, value: str) -> None:
        self.value = value

    def remove(self) -> None:
        self.value = None

    def has(self) -> bool:
        return bool(self.value and self.value.strip())


class DotenvCredentialStore:
    """Persists the secret as one entry of a dotenv file.

    ``fallback`` (usually the value from the environment) is returned when
    the file holds no value for ``name``.
    """

    def __init__(self, path: str | Path, name: str, fallback: str | None = None):
        self.path = Path(path).expanduser()
        self.name = name
        self.fallback = fallback

    def get(self) -> str | None:
        if self.path.exists():
            value = dotenv_values(self.path).get(self.name)
            if value:
                return value
        return self.fallback

    def save(self, value: str) -> None:
        if not value or not value.strip():
            raise ValueError("API key must not be empty")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(mode=0o600, exist_ok=True)
        set_key(self.path, self.name, value.strip(), quote_mode="never")
        logging.info(f"Saved {self.name} to {self.path}")

    def remove(self) -> None:
        if not self.path.exists():
            return
        if self.name in dotenv_values(self.path):
            unset_key(self.path, self.name, quote_mode="never")
            logging.info(f"Removed {self.name} from {self.path}")

    def has(self) -> bool:
        value = self.get()
        return value is not None and value.strip() != ""
