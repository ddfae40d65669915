import pytest

from app.core.errors import ForbiddenError
from app.services.credentials import authorize, hash_secret, require_secret


def test_hash_is_salted_and_never_plaintext() -> None:
    first = hash_secret("Secret123")
    second = hash_secret("Secret123")

    assert "Secret123" not in first
    assert first != second


def test_authorize_accepts_only_the_correct_secret() -> None:
    stored = hash_secret("Secret123")

    assert authorize(stored, "Secret123") is True
    assert authorize(stored, "secret123") is False
    assert authorize(stored, "") is False
    assert authorize(None, "Secret123") is False


def test_authorize_rejects_unparseable_hash() -> None:
    assert authorize("not-a-real-hash", "Secret123") is False


def test_require_secret_passes_on_valid_secret() -> None:
    require_secret(hash_secret("Secret123"), "Secret123", "user test@example.com")


def test_require_secret_raises_forbidden_on_wrong_secret() -> None:
    with pytest.raises(ForbiddenError):
        require_secret(hash_secret("Secret123"), "Wrong1234", "user test@example.com")
