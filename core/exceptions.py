"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
모든 예외는 치명적(fatal)이며 자동 재시도하지 않습니다.
CLI는 RoleCredsError를 잡아 메시지를 출력하고 0이 아닌 코드로 종료합니다.

예외 계층 구조:
    RoleCredsError (베이스)
    ├── ConfigMissingError (입력 YAML 없음)
    ├── ConfigParseError (YAML 파싱/검증 실패)
    ├── UnresolvedAccountReferenceError (역할이 없는 계정을 참조)
    ├── CredentialRequestError (STS 요청 실패)
    └── FileWriteError (캐시/출력 파일 쓰기 실패)

Usage:
    from core.exceptions import CredentialRequestError

    try:
        response = sts.get_session_token(DurationSeconds=3600)
    except ClientError as e:
        raise CredentialRequestError.from_client_error(
            kind="account",
            name="master",
            operation="get_session_token",
            client_error=e,
        ) from e
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class RoleCredsError(Exception):
    """기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigMissingError(RoleCredsError):
    """입력 설정 파일이 존재하지 않음"""

    def __init__(self, path: Path | str):
        super().__init__(f"설정 파일이 없습니다. YAML 설정 파일을 생성하세요: {path}")
        self.path = Path(path)
        self.details["path"] = str(path)


class ConfigParseError(RoleCredsError):
    """YAML 파싱 또는 설정 검증 실패"""

    def __init__(
        self,
        path: Path | str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"설정 파싱 오류 [{path}]: {message}", cause)
        self.path = Path(path)
        self.reason = message
        self.details["path"] = str(path)


class UnresolvedAccountReferenceError(RoleCredsError):
    """역할이 존재하지 않는 계정을 참조함"""

    def __init__(self, role_name: str, account_name: str):
        super().__init__(
            f"역할 '{role_name}'이(가) 정의되지 않은 계정 '{account_name}'을(를) 참조합니다"
        )
        self.role_name = role_name
        self.account_name = account_name
        self.details.update({"role": role_name, "account": account_name})


# =============================================================================
# STS 요청 관련 예외
# =============================================================================


class CredentialRequestError(RoleCredsError):
    """STS 자격증명 요청 실패

    네트워크, 인증 거부, 잘못된 MFA 코드, 스로틀링을 구분하지 않고 래핑합니다.

    Attributes:
        kind: "account" (세션 토큰) 또는 "role" (역할 위임)
        name: 처리 중이던 계정/역할 이름
        operation: STS API 이름
        error_code: AWS 에러 코드 (있을 경우)
    """

    def __init__(
        self,
        kind: str,
        name: str,
        operation: str,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"자격증명 요청 실패 [{kind} {name}] sts.{operation}"
        if error_code:
            message = f"{message} ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message, cause)

        self.kind = kind
        self.name = name
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "kind": kind,
                "name": name,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # ClientError 메시지는 이미 message에 포함됨
        if self.error_message:
            return self.message
        return super().__str__()

    @classmethod
    def from_client_error(
        cls,
        kind: str,
        name: str,
        operation: str,
        client_error: Exception,
    ) -> CredentialRequestError:
        """botocore 예외로부터 생성

        ClientError는 응답에서 에러 코드/메시지를 추출하고,
        그 외 BotoCoreError(네트워크, 자격증명 없음 등)는 원인으로만 보관합니다.
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            kind=kind,
            name=name,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 파일 관련 예외
# =============================================================================


class FileWriteError(RoleCredsError):
    """캐시/출력 파일 쓰기 실패

    부분 복구는 시도하지 않습니다. 기존 .backup 파일이 유일한 복구 수단입니다.
    """

    def __init__(self, path: Path | str, cause: Exception | None = None):
        super().__init__(f"파일 쓰기 실패: {path}", cause)
        self.path = Path(path)
        self.details["path"] = str(path)


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_FRIENDLY_MESSAGES = {
    "AccessDenied": "권한이 없습니다. IAM 정책 또는 역할 신뢰 관계를 확인하세요.",
    "ExpiredToken": "세션 토큰이 만료되었습니다. 세션 캐시를 삭제한 뒤 다시 실행하세요.",
    "InvalidClientTokenId": "잘못된 액세스 키입니다.",
    "SignatureDoesNotMatch": "시크릿 키가 올바르지 않습니다.",
    "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
}


def is_mfa_failure(error: Exception) -> bool:
    """MFA 코드 오류인지 확인

    STS는 잘못된 MFA 코드에 대해 AccessDenied와 함께
    "MultiFactorAuthentication" 문구를 반환합니다.
    """
    if isinstance(error, CredentialRequestError):
        return bool(error.error_message and "MultiFactorAuthentication" in error.error_message)
    return False


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, CredentialRequestError):
        if is_mfa_failure(error):
            return f"{error.message}\n  → MFA 코드가 올바르지 않거나 만료되었습니다. 새 코드로 다시 실행하세요."
        hint = _FRIENDLY_MESSAGES.get(error.error_code or "")
        if hint:
            return f"{error}\n  → {hint}"
        return str(error)

    if isinstance(error, RoleCredsError):
        return str(error)

    return f"{error.__class__.__name__}: {error}"
