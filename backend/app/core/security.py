"""
密码相关核心文件
backend/app/core/security.py
"""
import secrets
import string

from passlib.context import CryptContext

from app.core.config import settings

# ------------------------------
# 密码加密上下文
# ------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)

RANDOM_PASSWORD_LENGTH = 8
_PASSWORD_ALPHABET = string.ascii_letters + string.digits


# ------------------------------
# 密码加密（截断到72字节）
# ------------------------------
def get_password_hash(password: str) -> str:
    """
    加密密码：
    1. 将字符串密码编码为UTF-8字节（处理中文/特殊字符）
    2. 截断到72字节（符合bcrypt限制）
    3. 哈希处理
    """
    password_bytes = password.encode("utf-8")[:72]
    return pwd_context.hash(password_bytes)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """明文密码按加密逻辑同样编码+截断后与哈希值比对"""
    plain_password_bytes = plain_password.encode("utf-8")[:72]
    return pwd_context.verify(plain_password_bytes, hashed_password)


def generate_random_password(length: int = RANDOM_PASSWORD_LENGTH) -> str:
    """重置密码用的随机明文密码（字母+数字）"""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))
