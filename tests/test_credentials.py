"""Tests for API key storage."""

import pytest

from srtcorrect.credentials import DotenvCredentialStore, MemoryCredentialStore


def test_memory_store():
    store = MemoryCredentialStore()
    assert not store.has()

    store.save("sk-abc")
    assert store.has()
    assert store.get() == "sk-abc"

    store.remove()
    assert store.get() is None
    assert not store.has()


def test_dotenv_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "credentials.env"
    store = DotenvCredentialStore(path, "OPENAI_API_KEY")
    assert not store.has()

    store.save("  sk-abc  ")

    assert path.exists()
    assert store.get() == "sk-abc"
    assert DotenvCredentialStore(path, "OPENAI_API_KEY").has()

    store.remove()
    assert store.get() is None
    assert not store.has()


def test_dotenv_store_keeps_other_keys(tmp_path):
    path = tmp_path / "credentials.env"
    DotenvCredentialStore(path, "DEEPSEEK_API_KEY").save("ds-key")
    openai = DotenvCredentialStore(path, "OPENAI_API_KEY")
    openai.save("sk-key")

    openai.remove()

    assert DotenvCredentialStore(path, "DEEPSEEK_API_KEY").get() == "ds-key"


def test_dotenv_store_fallback(tmp_path):
    path = tmp_path / "credentials.env"
    store = DotenvCredentialStore(path, "OPENAI_API_KEY", fallback="from-env")

    assert store.get() == "from-env"
    store.save("from-file")
    assert store.get() == "from-file"


def test_dotenv_store_rejects_blank(tmp_path):
    store = DotenvCredentialStore(tmp_path / "credentials.env", "OPENAI_API_KEY")

    with pytest.raises(ValueError):
        store.save("   ")


def test_remove_missing_file_is_noop(tmp_path):
    DotenvCredentialStore(tmp_path / "absent.env", "OPENAI_API_KEY").remove()
