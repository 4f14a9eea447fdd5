"""
tests/conftest.py - pytest 공통 픽스처

STS 모킹, 임시 경로 Settings, YAML 설정 작성 헬퍼를 제공합니다.

Usage:
    def test_something(settings, write_config, fake_client_factory):
        write_config({"default": [{"name": "master"}]})
        manager = Manager(settings, client_factory=fake_client_factory)
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import yaml

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from core.config import Settings  # noqa: E402

# 고정 시각 (clock 주입용)
NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정

    실제 자격증명/설정 파일을 건드리지 않도록 환경변수를 고정합니다.
    """
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    for name in (
        "AWS_ROLE_CREDS_CONFIG",
        "AWS_ROLE_CREDS_SESSION_CACHE",
        "AWS_ROLE_CREDS_REGION",
        "AWS_ROLE_CREDS_SESSION_DURATION",
        "AWS_ROLE_CREDS_ROLE_DURATION",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)

    yield


# =============================================================================
# 경로/설정 픽스처
# =============================================================================


@pytest.fixture
def aws_dir(tmp_path) -> Path:
    """임시 ~/.aws 디렉토리"""
    path = tmp_path / ".aws"
    path.mkdir()
    return path


@pytest.fixture
def settings(aws_dir) -> Settings:
    """임시 경로를 사용하는 Settings"""
    return Settings(
        CONFIG_IN_FILE=aws_dir / "config.yaml",
        SESSION_CACHE_FILE=aws_dir / "session.yaml",
        CONFIG_OUT_FILE=aws_dir / "config",
        CREDENTIALS_OUT_FILE=aws_dir / "credentials",
    )


@pytest.fixture
def write_config(settings):
    """config.yaml 작성 헬퍼"""

    def _write(data: dict[str, Any] | str) -> Path:
        path = settings.CONFIG_IN_FILE
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_session_cache(settings):
    """session.yaml 작성 헬퍼"""

    def _write(data: dict[str, Any]) -> Path:
        path = settings.SESSION_CACHE_FILE
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


# =============================================================================
# STS 모킹 픽스처
# =============================================================================


def make_sts_credentials(
    prefix: str = "ASIA",
    expiration: datetime | None = None,
) -> dict[str, Any]:
    """STS 응답의 Credentials 블록 생성"""
    return {
        "AccessKeyId": f"{prefix}KEY",
        "SecretAccessKey": f"{prefix}SECRET",
        "SessionToken": f"{prefix}TOKEN",
        "Expiration": expiration or NOW + timedelta(hours=1),
    }


@pytest.fixture
def mock_sts_client():
    """STS 클라이언트 모킹"""
    mock_client = MagicMock()

    mock_client.get_session_token.return_value = {
        "Credentials": make_sts_credentials("SESS", NOW + timedelta(hours=24)),
    }
    mock_client.assume_role.return_value = {
        "Credentials": make_sts_credentials("ROLE", NOW + timedelta(hours=1)),
        "AssumedRoleUser": {
            "AssumedRoleId": "AROATEST:r1",
            "Arn": "arn:aws:sts::123456789012:assumed-role/R/r1",
        },
    }

    yield mock_client


@pytest.fixture
def fake_client_factory(mock_sts_client):
    """항상 mock_sts_client를 반환하는 client factory (호출 인자 기록)"""
    factory = MagicMock(return_value=mock_sts_client)
    return factory


@pytest.fixture
def fixed_clock():
    """NOW를 반환하는 clock"""
    return lambda: NOW


# =============================================================================
# moto 통합 (선택적)
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """moto 사용 시 AWS 자격 증명 설정"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
