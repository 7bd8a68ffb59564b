"""strava_client ライブラリの例外型定義"""

from __future__ import annotations


class StravaClientError(Exception):
    """strava_client ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class StravaClientErrorCodes:
    """StravaClientError のエラーコード定数。"""

    INVALID_PAGE_SIZE: str = "INVALID_PAGE_SIZE"
    INVALID_PAGE_BOUNDS: str = "INVALID_PAGE_BOUNDS"
    NOT_FOUND: str = "NOT_FOUND"
    UNAUTHORIZED: str = "UNAUTHORIZED"
    MALFORMED_WIRE_VALUE: str = "MALFORMED_WIRE_VALUE"
    OPERATION_CANCELLED: str = "OPERATION_CANCELLED"
    HTTP_ERROR: str = "HTTP_ERROR"
    RETRY_EXHAUSTED: str = "RETRY_EXHAUSTED"
    CODEC_REGISTRATION: str = "CODEC_REGISTRATION"


class InvalidPageSizeError(StravaClientError, ValueError):
    """per_page がエンドポイントの上限を超えた場合のエラー。"""

    def __init__(self, per_page: int, max_per_page: int) -> None:
        super().__init__(
            code=StravaClientErrorCodes.INVALID_PAGE_SIZE,
            message=f"invalid per_page: {per_page} (must not exceed {max_per_page})",
        )
        self.per_page = per_page
        self.max_per_page = max_per_page


class InvalidPageBoundsError(StravaClientError, ValueError):
    """page / per_page などが 1 未満の場合のエラー。"""

    def __init__(self, name: str, value: int) -> None:
        super().__init__(
            code=StravaClientErrorCodes.INVALID_PAGE_BOUNDS,
            message=f"invalid {name}: {value} (must be >= 1)",
        )
        self.name = name
        self.value = value


class NotFoundError(StravaClientError):
    """リソースが存在しない (HTTP 404)。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(StravaClientErrorCodes.NOT_FOUND, message, cause)


class UnauthorizedError(StravaClientError):
    """権限不足 (HTTP 401 / 403)。非公開クラブや write スコープ不足など。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(StravaClientErrorCodes.UNAUTHORIZED, message, cause)


class TransportError(StravaClientError):
    """HTTP 通信エラー。retryable が True の場合のみリトライ対象。"""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(StravaClientErrorCodes.HTTP_ERROR, message, cause)
        self.retryable = retryable
        self.status_code = status_code


class MalformedWireValueError(StravaClientError):
    """コーデックが解釈できないワイヤー値を受け取った場合のエラー。"""

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(StravaClientErrorCodes.MALFORMED_WIRE_VALUE, message)
        self.value = value


class OperationCancelledError(StravaClientError):
    """ページ取得の途中で呼び出し側がキャンセルした。"""

    def __init__(self, pages_fetched: int) -> None:
        super().__init__(
            StravaClientErrorCodes.OPERATION_CANCELLED,
            f"operation cancelled after {pages_fetched} page(s)",
        )
        self.pages_fetched = pages_fetched


class RetryError(StravaClientError):
    """リトライ上限に達した場合のエラー。"""

    def __init__(self, attempts: int, last_error: Exception | None = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        msg = f"リトライ上限 ({attempts} 回) に達しました"
        if last_error:
            msg += f": {last_error}"
        super().__init__(StravaClientErrorCodes.RETRY_EXHAUSTED, msg, last_error)


class CodecRegistrationError(StravaClientError):
    """コーデック登録の不正 (重複登録・freeze 後の登録)。"""

    def __init__(self, message: str) -> None:
        super().__init__(StravaClientErrorCodes.CODEC_REGISTRATION, message)
