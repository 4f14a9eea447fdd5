"""
core/auth/output/writer.py - AWS config/credentials 파일 생성

저장소의 세션/역할 자격증명을 AWS CLI 형식 INI 파일 두 개로 기록합니다.

    ~/.aws/config                 ~/.aws/credentials
    [default]                     [master]
    region = eu-west-1            aws_access_key_id = ...
                                  aws_secret_access_key = ...
    [profile master]              aws_security_token = ...
    aws_access_key_id = ...       region = eu-west-1
    ...

쓰기 전에 기존 파일을 <file>.backup 으로 복사합니다 (기존 파일이 없으면 생략).
파일 내용은 매번 새로 만들어 전체 교체합니다. 원자적 쓰기는 하지 않습니다.
"""

from __future__ import annotations

import configparser
import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from core.exceptions import FileWriteError

if TYPE_CHECKING:
    from core.config import Settings

    from ..cache import CredentialStore
    from ..types import SessionCredential

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "default"
CREDENTIALS_FILE_MODE = 0o600


def profile_fields(credential: SessionCredential) -> dict[str, str]:
    """프로파일 섹션 4개 필드"""
    return {
        "aws_access_key_id": credential.access_key_id,
        "aws_secret_access_key": credential.secret_access_key,
        "aws_security_token": credential.session_token,
        "region": credential.region,
    }


def _new_parser() -> configparser.ConfigParser:
    # default_section을 바꿔야 [default]가 일반 섹션으로 기록된다
    parser = configparser.ConfigParser(interpolation=None, default_section="__defaults__")
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


class ProfileWriter:
    """config/credentials 파일 작성기

    Example:
        writer = ProfileWriter(settings)
        writer.write(store)
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.config_path = Path(settings.CONFIG_OUT_FILE)
        self.credentials_path = Path(settings.CREDENTIALS_OUT_FILE)

    def backup(self, path: Path, mode: int | None = None) -> Path | None:
        """기존 파일을 <file>.backup 으로 복사

        Args:
            path: 원본 파일
            mode: 지정 시 백업 파일 권한 (credentials 백업은 0o600)

        Returns:
            백업 경로 또는 None (원본 파일 없음)

        Raises:
            FileWriteError: 복사 실패
        """
        if not path.exists():
            logger.debug("백업 생략 (기존 파일 없음): %s", path)
            return None

        backup_path = self.settings.backup_path(path)
        try:
            shutil.copyfile(path, backup_path)
            if mode is not None:
                os.chmod(backup_path, mode)
        except OSError as e:
            raise FileWriteError(backup_path, cause=e) from e

        logger.debug("백업 생성: %s", backup_path)
        return backup_path

    def build(self, store: CredentialStore) -> tuple[configparser.ConfigParser, configparser.ConfigParser]:
        """저장소 내용으로 config/credentials 파서 생성

        세션 섹션을 먼저, 역할 섹션을 나중에 씁니다.
        역할 이름이 계정 이름과 같으면 역할 섹션이 덮어씁니다.

        Returns:
            (config, credentials)
        """
        config = _new_parser()
        credentials = _new_parser()

        config[DEFAULT_SECTION] = {"region": self.settings.DEFAULT_REGION}

        for name, session in store.sessions.items():
            config[f"profile {name}"] = profile_fields(session)
            credentials[name] = profile_fields(session)

        for name, role in store.roles.items():
            if name in store.sessions:
                logger.warning("역할 '%s'이(가) 같은 이름의 계정 프로파일을 덮어씁니다", name)
            config[f"profile {name}"] = profile_fields(role)
            credentials[name] = profile_fields(role)

        return config, credentials

    def write(self, store: CredentialStore) -> list[Path]:
        """백업 후 config/credentials 파일 전체 교체

        Returns:
            기록한 파일 경로 목록

        Raises:
            FileWriteError: 백업 또는 쓰기 실패
        """
        self.backup(self.config_path)
        self.backup(self.credentials_path, mode=CREDENTIALS_FILE_MODE)

        config, credentials = self.build(store)

        self._write_file(self.config_path, config)
        self._write_file(self.credentials_path, credentials, mode=CREDENTIALS_FILE_MODE)

        return [self.config_path, self.credentials_path]

    def _write_file(
        self,
        path: Path,
        parser: configparser.ConfigParser,
        mode: int | None = None,
    ) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                parser.write(f)
            if mode is not None:
                os.chmod(path, mode)
        except OSError as e:
            raise FileWriteError(path, cause=e) from e

        logger.info("%s 업데이트 (%d개 섹션)", path, len(parser.sections()))
