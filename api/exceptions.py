"""
异常定义 - 统一的异常处理

每个异常对应响应信封 {code, data, message} 中的一个 code，
由 app.py 中注册的错误处理器统一转换为 HTTP 响应。
"""


class BaseAPIException(Exception):
    """基础 API 异常"""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = 500, code: str = None):
        """
        初始化异常

        Args:
            message: 异常消息
            status_code: HTTP 状态码
            code: 机器可读的错误码（默认取类属性）
        """
        self.message = message
        self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def to_dict(self):
        """转换为响应信封"""
        return {
            "code": self.code,
            "data": None,
            "message": self.message
        }


class DataNotFoundException(BaseAPIException):
    """数据未找到异常"""

    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class PaperNotFoundException(DataNotFoundException):
    """论文不存在或不属于当前 API Key（两种情况对调用方不可区分）"""


class ValidationException(BaseAPIException):
    """验证异常"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message, status_code=400)


class AuthorizationException(BaseAPIException):
    """API Key 缺失或无效"""

    code = "INVALID_API_KEY"

    def __init__(self, message: str = "API key is invalid"):
        super().__init__(message, status_code=401)


class DuplicatePaperException(BaseAPIException):
    """同一 API Key 下 (title, firstAuthor) 重复"""

    code = "DUPLICATE_PAPER"

    def __init__(self, message: str = "A paper with the same title and author already exists"):
        super().__init__(message, status_code=409)


class EmailExistsException(BaseAPIException):
    """邮箱已注册"""

    code = "EMAIL_EXISTS"

    def __init__(self, message: str = "This email is already registered"):
        super().__init__(message, status_code=409)


class RateLimitedException(BaseAPIException):
    """请求频率超限（暂时性，调用方稍后重试）"""

    code = "RATE_LIMITED"

    def __init__(self, message: str = "Too many requests"):
        super().__init__(message, status_code=429)


class InternalServerException(BaseAPIException):
    """服务器内部错误异常"""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Unexpected server error"):
        super().__init__(message, status_code=500)
