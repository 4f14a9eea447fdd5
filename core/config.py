"""
core/config.py - 중앙 설정 관리

애플리케이션 전체에서 사용하는 기본값(경로, 리전, 세션 유지 시간)을
불변(frozen) 데이터클래스로 정의합니다. 각 컴포넌트는 전역 상수를
직접 참조하지 않고 생성 시점에 Settings 인스턴스를 전달받습니다.

Usage:
    from core.config import Settings, settings, get_default_region

    # 기본 설정
    region = settings.DEFAULT_REGION  # "eu-west-1"

    # CLI 옵션으로 일부 값만 교체
    custom = settings.with_overrides(CONFIG_IN_FILE=Path("/tmp/config.yaml"))
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# 환경변수 이름
ENV_CONFIG_FILE = "AWS_ROLE_CREDS_CONFIG"
ENV_SESSION_CACHE_FILE = "AWS_ROLE_CREDS_SESSION_CACHE"
ENV_REGION = "AWS_ROLE_CREDS_REGION"
ENV_SESSION_DURATION = "AWS_ROLE_CREDS_SESSION_DURATION"
ENV_ROLE_DURATION = "AWS_ROLE_CREDS_ROLE_DURATION"

FALLBACK_VERSION = "0.1.0"


def get_aws_dir() -> Path:
    """AWS 설정 디렉토리 (~/.aws)"""
    return Path.home() / ".aws"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)

    Attributes:
        CONFIG_IN_FILE: 계정/역할 정의 YAML 파일
        SESSION_CACHE_FILE: 세션 자격증명 캐시 YAML 파일
        CONFIG_OUT_FILE: 생성할 AWS config 파일
        CREDENTIALS_OUT_FILE: 생성할 AWS credentials 파일
        DEFAULT_REGION: 리전 미지정 시 사용하는 기본 리전
        SESSION_DURATION_SECONDS: GetSessionToken 기본 유지 시간 (24시간)
        ROLE_DURATION_SECONDS: AssumeRole 기본 유지 시간 (1시간)
        STS_CONNECT_TIMEOUT: STS 연결 타임아웃 (초)
        STS_READ_TIMEOUT: STS 읽기 타임아웃 (초)
    """

    CONFIG_IN_FILE: Path = field(default_factory=lambda: get_aws_dir() / "config.yaml")
    SESSION_CACHE_FILE: Path = field(default_factory=lambda: get_aws_dir() / "session.yaml")
    CONFIG_OUT_FILE: Path = field(default_factory=lambda: get_aws_dir() / "config")
    CREDENTIALS_OUT_FILE: Path = field(default_factory=lambda: get_aws_dir() / "credentials")
    DEFAULT_REGION: str = "eu-west-1"
    SESSION_DURATION_SECONDS: int = 86400
    ROLE_DURATION_SECONDS: int = 3600
    STS_CONNECT_TIMEOUT: int = 10
    STS_READ_TIMEOUT: int = 30

    BACKUP_SUFFIX: str = ".backup"

    @classmethod
    def from_env(cls) -> Settings:
        """환경변수를 반영한 설정 생성

        - AWS_ROLE_CREDS_CONFIG: 입력 YAML 경로
        - AWS_ROLE_CREDS_SESSION_CACHE: 세션 캐시 경로
        - AWS_ROLE_CREDS_REGION: 기본 리전
        - AWS_ROLE_CREDS_SESSION_DURATION, AWS_ROLE_CREDS_ROLE_DURATION: 기본 유지 시간 (초)
        """
        overrides: dict[str, Any] = {}

        config_file = os.environ.get(ENV_CONFIG_FILE)
        if config_file:
            overrides["CONFIG_IN_FILE"] = Path(config_file).expanduser()

        cache_file = os.environ.get(ENV_SESSION_CACHE_FILE)
        if cache_file:
            overrides["SESSION_CACHE_FILE"] = Path(cache_file).expanduser()

        region = os.environ.get(ENV_REGION)
        if region:
            overrides["DEFAULT_REGION"] = region

        overrides["SESSION_DURATION_SECONDS"] = get_env_int(ENV_SESSION_DURATION, cls.SESSION_DURATION_SECONDS)
        overrides["ROLE_DURATION_SECONDS"] = get_env_int(ENV_ROLE_DURATION, cls.ROLE_DURATION_SECONDS)

        return cls(**overrides)

    def with_overrides(self, **kwargs: Any) -> Settings:
        """일부 값을 교체한 새 Settings 반환

        None 값은 무시합니다 (CLI 옵션 미지정).
        경로 필드에 str이 들어오면 Path로 변환합니다.

        Raises:
            TypeError: 존재하지 않는 필드명
        """
        known = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}

        for key, value in kwargs.items():
            if key not in known:
                raise TypeError(f"알 수 없는 설정 항목: {key}")
            if value is None:
                continue
            if key.endswith("_FILE"):
                value = Path(value).expanduser()
            changes[key] = value

        return replace(self, **changes) if changes else self

    def backup_path(self, path: Path) -> Path:
        """백업 파일 경로 (<file>.backup)"""
        return path.with_name(path.name + self.BACKUP_SUFFIX)


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름
        format: 로그 포맷
        date_format: 날짜 포맷
    """

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL, LOG_FORMAT 환경변수에서 로드"""
        return cls(
            level=os.environ.get("LOG_LEVEL", cls.level).upper(),
            format=os.environ.get("LOG_FORMAT", cls.format),
        )


# 전역 기본 설정
settings = Settings()


def get_default_region() -> str:
    """기본 리전 반환

    AWS_ROLE_CREDS_REGION 환경변수가 있으면 우선 사용합니다.
    """
    return os.environ.get(ENV_REGION) or settings.DEFAULT_REGION


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (실패 시 기본값)"""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.debug("정수가 아닌 환경변수 값 무시: %s=%s", name, value)
        return default


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 패키지 버전 반환

    패키지 메타데이터가 없으면 (소스 실행) 기본 버전을 반환합니다.
    """
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("aws-role-creds")
    except PackageNotFoundError:
        return FALLBACK_VERSION
