from security.passwords import BCRYPT_ROUNDS, hash_password, verify_password


def test_hash_uses_bcrypt_with_cost_factor_10():
    assert BCRYPT_ROUNDS == 10
    assert hash_password("admin123").startswith("$2b$10$")


def test_hash_is_salted():
    assert hash_password("admin123") != hash_password("admin123")


def test_verify_password():
    hashed = hash_password("admin123")
    assert verify_password("admin123", hashed)
    assert not verify_password("admin1234", hashed)
