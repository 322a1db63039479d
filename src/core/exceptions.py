"""自定义异常类

请求管道只会向调用方抛出 NetworkError 的六种子类之一。
"""

from enum import Enum
from typing import Optional


class NetworkErrorKind(Enum):
    """错误种类（封闭集合）"""

    NO_INTERNET = "noInternet"
    INVALID_URL = "invalidUrl"
    ENCODING_ERROR = "encodingError"
    DECODING_ERROR = "decodingError"
    INVALID_RESPONSE = "invalidResponse"
    CUSTOM_ERROR = "customError"


class NetworkError(Exception):
    """网络请求基础异常"""

    kind: NetworkErrorKind

    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(f"{message} ({url})" if url else message)


class NoInternetError(NetworkError):
    """连通性预检查失败"""

    kind = NetworkErrorKind.NO_INTERNET

    def __init__(self, url: str | None = None):
        super().__init__("No internet connection", url)


class InvalidUrlError(NetworkError):
    """URL 无法解析"""

    kind = NetworkErrorKind.INVALID_URL

    def __init__(self, url: str | None = None):
        super().__init__("Invalid URL", url)


class EncodingError(NetworkError):
    """请求体无法序列化"""

    kind = NetworkErrorKind.ENCODING_ERROR

    def __init__(
        self, cause: Optional[BaseException] = None, url: str | None = None
    ):
        self.cause = cause
        super().__init__(f"Failed to encode payload: {cause}", url)


class DecodingError(NetworkError):
    """响应体无法反序列化，或来源不明的失败"""

    kind = NetworkErrorKind.DECODING_ERROR

    def __init__(
        self, cause: Optional[BaseException] = None, url: str | None = None
    ):
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}", url)


class InvalidResponseError(NetworkError):
    """状态码不是 200"""

    kind = NetworkErrorKind.INVALID_RESPONSE

    def __init__(self, status_code: int, body: bytes = b"", url: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Unexpected status code {status_code}", url)


class CustomError(NetworkError):
    """收到响应之前的传输层失败"""

    kind = NetworkErrorKind.CUSTOM_ERROR

    def __init__(self, wrapped: BaseException, url: str | None = None):
        self.wrapped = wrapped
        super().__init__(f"Transport failed: {wrapped}", url)


class TransportError(Exception):
    """传输层异常（仅在 Transport 与请求管道之间传递）"""

    def __init__(self, inner: BaseException, url: str | None = None):
        self.inner = inner
        self.url = url
        super().__init__(str(inner))


def to_network_error(
    error: BaseException, url: str | None = None
) -> NetworkError:
    """将任意异常映射到封闭的错误集合

    已知的 NetworkError 原样返回；其余一律视为 DecodingError。
    """
    if isinstance(error, NetworkError):
        return error
    return DecodingError(error, url)
