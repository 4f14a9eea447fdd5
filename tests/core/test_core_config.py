"""
tests/test_core_config.py - core/config.py 테스트
"""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from core.config import (
    FALLBACK_VERSION,
    LogConfig,
    Settings,
    get_aws_dir,
    get_default_region,
    get_env_int,
    get_version,
    settings,
)


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(FrozenInstanceError):
            settings.DEFAULT_REGION = "us-east-1"  # type: ignore[misc]

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_REGION == "eu-west-1"
        assert settings.SESSION_DURATION_SECONDS == 86400
        assert settings.ROLE_DURATION_SECONDS == 3600
        assert settings.BACKUP_SUFFIX == ".backup"

    def test_default_paths(self, monkeypatch, tmp_path):
        """기본 경로는 ~/.aws 아래"""
        monkeypatch.setenv("HOME", str(tmp_path))

        defaults = Settings()

        assert get_aws_dir() == tmp_path / ".aws"
        assert defaults.CONFIG_IN_FILE == tmp_path / ".aws" / "config.yaml"
        assert defaults.SESSION_CACHE_FILE == tmp_path / ".aws" / "session.yaml"
        assert defaults.CONFIG_OUT_FILE == tmp_path / ".aws" / "config"
        assert defaults.CREDENTIALS_OUT_FILE == tmp_path / ".aws" / "credentials"

    def test_backup_path(self):
        """백업 경로는 <file>.backup"""
        assert settings.backup_path(Path("/x/credentials")) == Path("/x/credentials.backup")


class TestSettingsFromEnv:
    """Settings.from_env 테스트"""

    def test_no_env(self):
        """환경변수 없으면 기본값"""
        assert Settings.from_env().DEFAULT_REGION == "eu-west-1"

    def test_env_overrides(self, monkeypatch, tmp_path):
        """환경변수 반영"""
        monkeypatch.setenv("AWS_ROLE_CREDS_CONFIG", str(tmp_path / "in.yaml"))
        monkeypatch.setenv("AWS_ROLE_CREDS_SESSION_CACHE", str(tmp_path / "cache.yaml"))
        monkeypatch.setenv("AWS_ROLE_CREDS_REGION", "ap-northeast-2")
        monkeypatch.setenv("AWS_ROLE_CREDS_SESSION_DURATION", "7200")
        monkeypatch.setenv("AWS_ROLE_CREDS_ROLE_DURATION", "900")

        loaded = Settings.from_env()

        assert loaded.CONFIG_IN_FILE == tmp_path / "in.yaml"
        assert loaded.SESSION_CACHE_FILE == tmp_path / "cache.yaml"
        assert loaded.DEFAULT_REGION == "ap-northeast-2"
        assert loaded.SESSION_DURATION_SECONDS == 7200
        assert loaded.ROLE_DURATION_SECONDS == 900

    def test_invalid_duration_ignored(self, monkeypatch):
        """정수가 아닌 값은 기본값"""
        monkeypatch.setenv("AWS_ROLE_CREDS_SESSION_DURATION", "one-day")
        assert Settings.from_env().SESSION_DURATION_SECONDS == 86400


class TestWithOverrides:
    """Settings.with_overrides 테스트"""

    def test_none_values_ignored(self):
        """None은 무시"""
        base = Settings(DEFAULT_REGION="us-east-1")
        assert base.with_overrides(DEFAULT_REGION=None) is base

    def test_returns_new_instance(self):
        """원본은 변경되지 않음"""
        base = Settings()
        changed = base.with_overrides(DEFAULT_REGION="us-west-2")

        assert changed.DEFAULT_REGION == "us-west-2"
        assert base.DEFAULT_REGION == "eu-west-1"

    def test_path_strings_converted(self, monkeypatch, tmp_path):
        """경로 문자열은 Path로 변환 (~ 확장)"""
        monkeypatch.setenv("HOME", str(tmp_path))

        changed = Settings().with_overrides(CONFIG_OUT_FILE="~/out/config")

        assert changed.CONFIG_OUT_FILE == tmp_path / "out" / "config"

    def test_unknown_key(self):
        """존재하지 않는 필드"""
        with pytest.raises(TypeError):
            Settings().with_overrides(NOT_A_SETTING=1)


class TestLogConfig:
    """LogConfig 테스트"""

    def test_defaults(self):
        """기본 WARNING 레벨"""
        assert LogConfig.from_env().level == "WARNING"

    def test_env(self, monkeypatch):
        """LOG_LEVEL 환경변수 (대문자 변환)"""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LogConfig.from_env().level == "DEBUG"


class TestHelpers:
    """모듈 레벨 헬퍼 함수 테스트"""

    def test_get_default_region(self, monkeypatch):
        """AWS_ROLE_CREDS_REGION 우선"""
        assert get_default_region() == "eu-west-1"
        monkeypatch.setenv("AWS_ROLE_CREDS_REGION", "sa-east-1")
        assert get_default_region() == "sa-east-1"

    def test_get_env_int(self, monkeypatch):
        """정수 환경변수"""
        monkeypatch.setenv("SOME_INT", "42")
        assert get_env_int("SOME_INT", 1) == 42
        assert get_env_int("MISSING_INT", 7) == 7

    def test_get_version(self):
        """버전 문자열"""
        version = get_version()
        assert isinstance(version, str)
        assert version.count(".") >= 1
        assert FALLBACK_VERSION == "0.1.0"
