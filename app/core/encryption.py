# app/core/encryption.py
"""
Симметричное шифрование секретов (пароли доступов клиентов) через Fernet.

Ключ выводится из ENCRYPTION_KEY (или SECRET_KEY, если он не задан):
SHA-256 от строки, затем urlsafe base64, как того требует Fernet.
"""
import base64
import hashlib
import logging
from functools import lru_cache
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from app.core.settings import settings
from app.core.exceptions import EncryptionError

logger = logging.getLogger("Taskboard.Encryption")

MASKED_VALUE = "••••••••"

@lru_cache(maxsize=1)
def _get_fernet() -> Fernet:
    key_source = settings.ENCRYPTION_KEY or settings.SECRET_KEY
    derived = hashlib.sha256(key_source.encode("utf-8")).digest()
    return Fernet(base64.urlsafe_b64encode(derived))

def encrypt_secret(value: Optional[str]) -> Optional[str]:
    """
    Шифрует строку. Пустые значения сохраняются как None.
    """
    if not value:
        return None
    return _get_fernet().encrypt(value.encode("utf-8")).decode("ascii")

def decrypt_secret(token: Optional[str]) -> Optional[str]:
    """
    Расшифровывает строку, зашифрованную encrypt_secret.
    """
    if not token:
        return None
    try:
        return _get_fernet().decrypt(token.encode("ascii")).decode("utf-8")
    except InvalidToken:
        logger.error("Failed to decrypt stored secret: invalid token or key")
        raise EncryptionError()

def mask_secret(value: Optional[str]) -> Optional[str]:
    return MASKED_VALUE if value else None
