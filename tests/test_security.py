import string

import pytest

from leadhub.app.core.security import (
    PASSWORD_SYMBOLS,
    generate_password,
    get_password_hash,
    verify_password,
)


def test_password_hashing_not_plain():
    plain = "password123"
    hashed = get_password_hash(plain)
    assert hashed and hashed != plain


def test_verify_password():
    hashed = get_password_hash("secret")
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


@pytest.mark.parametrize("length", [12, 16, 32])
def test_generated_password_mixes_character_classes(length):
    password = generate_password(length)
    assert len(password) == length
    assert any(c in string.ascii_uppercase for c in password)
    assert any(c in string.ascii_lowercase for c in password)
    assert any(c in string.digits for c in password)
    assert any(c in PASSWORD_SYMBOLS for c in password)


def test_generated_passwords_differ():
    assert len({generate_password() for _ in range(20)}) == 20


def test_generated_password_minimum_length():
    with pytest.raises(ValueError):
        generate_password(8)
