"""パスワードハッシュ（Argon2id）"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=19456,
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=Type.ID,
)


def hash_password(password: str) -> str:
    """パスワードをArgon2idでハッシュ化する（PHC形式の文字列を返す）"""
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """パスワードとハッシュを照合する"""
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False
