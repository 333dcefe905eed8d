"""
注册服务 - 为邮箱签发 API Key

明文 API Key 只在注册时返回一次，数据库中只保存 SHA-256 哈希。
"""
import logging
import re
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError

from api.repositories import AccessKeyRepository
from api.exceptions import EmailExistsException, ValidationException
from api.utils.common import generate_api_key, hash_api_key

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SetupService:
    """注册服务"""

    def __init__(self, repository: AccessKeyRepository):
        self.repository = repository

    def register_user(self, email: Optional[str]) -> Dict[str, str]:
        """
        注册新用户并生成 API Key

        Args:
            email: 邮箱地址

        Returns:
            {"id": API Key ID, "apiKey": 明文 API Key}

        Raises:
            ValidationException: 邮箱缺失或格式错误
            EmailExistsException: 邮箱已注册
        """
        if not isinstance(email, str) or not email.strip():
            raise ValidationException("Email is required")

        email = email.strip()
        if not EMAIL_PATTERN.match(email):
            raise ValidationException("Invalid email format")
        email = email.lower()

        if self.repository.get_by_email(email) is not None:
            logger.warning(f"邮箱已注册: {email}")
            raise EmailExistsException()

        api_key = generate_api_key(email)
        try:
            access_key = self.repository.create(email, hash_api_key(api_key))
        except IntegrityError:
            logger.warning(f"邮箱已注册（唯一约束）: {email}")
            raise EmailExistsException()

        logger.info(f"用户注册成功: {access_key.id}")
        return {"id": access_key.id, "apiKey": api_key}

    def resolve_owner(self, api_key: str) -> Optional[str]:
        """将明文 API Key 解析为 API Key ID，无效时返回 None"""
        access_key = self.repository.get_by_hashed_key(hash_api_key(api_key))
        return access_key.id if access_key is not None else None
