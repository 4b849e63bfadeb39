"""
비밀번호 해시

bcrypt 기반 해시 생성/검증.
bcrypt는 CPU 바운드이므로 asyncio.to_thread로 이벤트 루프 밖에서 실행.
"""

import asyncio

import bcrypt

from core.constants import Defaults


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def _verify(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # 손상된 해시는 불일치로 처리
        return False


async def hash_password(password: str, rounds: int = Defaults.BCRYPT_ROUNDS) -> str:
    """비밀번호 해시 생성

    Args:
        password: 평문 비밀번호
        rounds: bcrypt cost factor

    Returns:
        bcrypt 해시 문자열
    """
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    """비밀번호 검증"""
    return await asyncio.to_thread(_verify, password, password_hash)
