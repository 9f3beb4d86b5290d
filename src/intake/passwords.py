"""Password generator for the admin credential panel."""

import secrets

# no 0/O, 1/l/I
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789!@#$%"
DEFAULT_PASSWORD_LENGTH = 12


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
