"""
セッショントークン関連のヘルパー
"""

import re
import secrets

# 32バイト = 256bit の乱数
SESSION_TOKEN_BYTES = 32
SESSION_TOKEN_LENGTH = SESSION_TOKEN_BYTES * 2

_TOKEN_PATTERN = re.compile(rf"[0-9a-f]{{{SESSION_TOKEN_LENGTH}}}")


def generate_session_token() -> str:
    """
    セッショントークンを生成

    Returns:
        ランダムな64文字のHEX文字列
    """
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def is_well_formed_token(token: str | None) -> bool:
    """
    トークンの形式を検証

    形式が不正なトークンはDBに問い合わせずに無効と判定するために使う。
    """
    if not token:
        return False
    return _TOKEN_PATTERN.fullmatch(token) is not None
