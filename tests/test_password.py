"""Password hashing: bcrypt hash/verify."""

from pokecatch.auth.password import hash_password, verify_password


def test_hash_is_not_plaintext_and_embeds_cost():
    h = hash_password("pikapika", rounds=4)
    assert "pikapika" not in h
    assert h.startswith("$2")
    assert "$04$" in h


def test_hash_is_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_verify_roundtrip():
    h = hash_password("correct horse", rounds=4)
    assert verify_password("correct horse", h)
    assert not verify_password("wrong horse", h)


def test_default_cost_comes_from_settings():
    h = hash_password("pikapika")
    assert h.split("$")[2] == "10"


def test_verify_against_garbage_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False
    assert verify_password("anything", "") is False


def test_long_passwords_are_truncated_consistently():
    base = "x" * 72
    h = hash_password(base + "tail-one", rounds=4)
    assert verify_password(base + "tail-two", h)
