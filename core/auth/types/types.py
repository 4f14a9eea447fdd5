"""
core/auth/types/types.py - 자격증명 모듈의 핵심 타입 정의

이 모듈은 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - AccountSpec: 마스터 계정 정의 (config.yaml의 default 항목)
    - RoleSpec: 역할 프로파일 정의 (config.yaml의 profiles 항목)
    - SessionCredential: GetSessionToken 결과 (세션 캐시에 저장)
    - RoleCredential: AssumeRole 결과 (실행마다 새로 발급, 캐시하지 않음)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.config import Settings

logger = logging.getLogger(__name__)


def to_utc(value: datetime) -> datetime:
    """timezone 정보가 없는 datetime은 UTC로 간주"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_expiration(value: Any) -> datetime:
    """만료 시간 파싱

    YAML 로더가 timestamp를 datetime으로 변환한 경우와
    ISO 8601 문자열("2024-01-01T00:00:00+00:00", "...Z")을 모두 처리합니다.

    Raises:
        ValueError: 해석할 수 없는 값
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc(datetime.fromisoformat(text))
    raise ValueError(f"만료 시간 형식이 올바르지 않습니다: {value!r}")


def required_str(data: dict[str, Any], key: str) -> str:
    """필수 문자열 필드 (null, 빈 값은 ValueError)

    Raises:
        KeyError: 필드 누락
        ValueError: 값이 비어 있음
    """
    value = data[key]
    if value is None or value == "":
        raise ValueError(f"'{key}' 값이 비어 있습니다")
    return str(value)


# =============================================================================
# 설정 타입 (config.yaml)
# =============================================================================


@dataclass
class AccountSpec:
    """마스터 계정 정의

    Attributes:
        name: 계정 이름 (고유 키)
        region: STS 리전 (None이면 Settings.DEFAULT_REGION)
        duration: 세션 유지 시간 초 (None이면 Settings.SESSION_DURATION_SECONDS)
        access_key_id: 정적 액세스 키 (YAML: id)
        secret_access_key: 정적 시크릿 키 (YAML: key)
        mfa_arn: MFA 디바이스 ARN (있으면 OTP 입력 요청)
    """

    name: str
    region: str | None = None
    duration: int | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    mfa_arn: str | None = None

    @property
    def has_static_credentials(self) -> bool:
        """id/key 둘 다 있어야 정적 자격증명 사용"""
        return bool(self.access_key_id and self.secret_access_key)

    def resolve_region(self, settings: Settings) -> str:
        return self.region or settings.DEFAULT_REGION

    def resolve_duration(self, settings: Settings) -> int:
        return self.duration or settings.SESSION_DURATION_SECONDS


@dataclass
class RoleSpec:
    """역할 프로파일 정의

    Attributes:
        name: 프로파일 이름 (고유 키, RoleSessionName으로도 사용)
        default_account: 세션을 제공할 계정 이름 (YAML: default)
        role_arn: 위임받을 역할 ARN
        region: 리전 (None이면 Settings.DEFAULT_REGION)
        duration: 역할 세션 유지 시간 초 (None이면 Settings.ROLE_DURATION_SECONDS)
    """

    name: str
    default_account: str
    role_arn: str
    region: str | None = None
    duration: int | None = None

    def resolve_region(self, settings: Settings) -> str:
        return self.region or settings.DEFAULT_REGION

    def resolve_duration(self, settings: Settings) -> int:
        return self.duration or settings.ROLE_DURATION_SECONDS


# =============================================================================
# 자격증명 타입
# =============================================================================


@dataclass
class SessionCredential:
    """세션 자격증명 (GetSessionToken 결과)

    세션 캐시 파일(session.yaml)에 계정 이름을 키로 저장됩니다.

    Attributes:
        access_key_id: 임시 액세스 키
        secret_access_key: 임시 시크릿 키
        session_token: 세션 토큰
        expiration: 만료 시간 (UTC)
        region: 발급 시 사용한 리전
    """

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime
    region: str

    def __post_init__(self):
        self.expiration = to_utc(self.expiration)

    def is_valid(self, now: datetime) -> bool:
        """now가 만료 시간보다 엄격히 이전이면 유효"""
        return to_utc(now) < self.expiration

    def remaining_seconds(self, now: datetime) -> int:
        """남은 시간 (초, 만료됐으면 0)"""
        remaining = self.expiration - to_utc(now)
        return max(0, int(remaining.total_seconds()))

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (세션 캐시 저장용)"""
        return {
            "access_key_id": self.access_key_id,
            "secret_access_key": self.secret_access_key,
            "session_token": self.session_token,
            "expiration": self.expiration.isoformat(),
            "region": self.region,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionCredential:
        """딕셔너리에서 생성 (세션 캐시 로드용)

        Raises:
            KeyError: 필수 필드 누락
            ValueError: 만료 시간 형식 오류 또는 빈 값
        """
        return cls(
            access_key_id=required_str(data, "access_key_id"),
            secret_access_key=required_str(data, "secret_access_key"),
            session_token=required_str(data, "session_token"),
            expiration=parse_expiration(data["expiration"]),
            region=required_str(data, "region"),
        )

    @classmethod
    def from_sts(cls, credentials: dict[str, Any], region: str) -> SessionCredential:
        """STS 응답의 Credentials 블록에서 생성"""
        return cls(
            access_key_id=credentials["AccessKeyId"],
            secret_access_key=credentials["SecretAccessKey"],
            session_token=credentials["SessionToken"],
            expiration=parse_expiration(credentials["Expiration"]),
            region=region,
        )


@dataclass
class RoleCredential(SessionCredential):
    """역할 자격증명 (AssumeRole 결과)

    실행마다 새로 발급되며 캐시하지 않습니다.

    Attributes:
        role: 위임받은 역할 ARN
    """

    role: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["role"] = self.role
        return data

    @classmethod
    def from_sts(cls, credentials: dict[str, Any], region: str, role: str = "") -> RoleCredential:
        """STS AssumeRole 응답의 Credentials 블록에서 생성"""
        return cls(
            access_key_id=credentials["AccessKeyId"],
            secret_access_key=credentials["SecretAccessKey"],
            session_token=credentials["SessionToken"],
            expiration=parse_expiration(credentials["Expiration"]),
            region=region,
            role=role,
        )
