"""
자격증명 저장소 및 세션 캐시 파일 관리 구현

- CredentialStore: 세션/역할 자격증명 메모리 저장소 (만료 기반 유효성 검사)
- SessionCacheManager: 세션 캐시 파일(session.yaml) 로드/저장

설계 원칙:
- 세션 자격증명만 파일로 캐시 (역할 자격증명은 매 실행마다 재발급)
- 캐시 파일은 항상 전체 덮어쓰기 (병합/추가 없음)
- 삭제 연산 없음: 항목은 교체되거나 그대로 유지됨
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from core.exceptions import FileWriteError

from ..types import RoleCredential, SessionCredential

logger = logging.getLogger(__name__)

SESSION_CACHE_FILE_MODE = 0o600


# =============================================================================
# Credential Store
# =============================================================================


class CredentialStore:
    """메모리 기반 자격증명 저장소

    세션 자격증명은 계정 이름, 역할 자격증명은 역할 프로파일 이름을 키로 보관합니다.
    단일 스레드 실행만 가정하므로 잠금을 사용하지 않습니다.
    """

    def __init__(self, sessions: dict[str, SessionCredential] | None = None):
        """CredentialStore 초기화

        Args:
            sessions: 세션 캐시 파일에서 읽은 기존 세션 자격증명
        """
        self.sessions: dict[str, SessionCredential] = dict(sessions or {})
        self.roles: dict[str, RoleCredential] = {}

    # -------------------------------------------------------------------------
    # 세션 자격증명
    # -------------------------------------------------------------------------

    def is_valid(self, name: str, now: datetime) -> bool:
        """세션 자격증명이 존재하고 now < expiration 이면 True"""
        entry = self.sessions.get(name)
        return entry is not None and entry.is_valid(now)

    def get(self, name: str) -> SessionCredential | None:
        return self.sessions.get(name)

    def put(self, name: str, entry: SessionCredential) -> None:
        self.sessions[name] = entry

    def remaining_seconds(self, name: str, now: datetime) -> int | None:
        """남은 유효 시간 (초)

        Returns:
            남은 초 (만료 시 0) 또는 None (항목 없음)
        """
        entry = self.sessions.get(name)
        if entry is None:
            return None
        return entry.remaining_seconds(now)

    # -------------------------------------------------------------------------
    # 역할 자격증명
    # -------------------------------------------------------------------------

    def get_role(self, name: str) -> RoleCredential | None:
        return self.roles.get(name)

    def put_role(self, name: str, entry: RoleCredential) -> None:
        self.roles[name] = entry

    def __len__(self) -> int:
        return len(self.sessions) + len(self.roles)


# =============================================================================
# Session Cache File
# =============================================================================


class SessionCacheManager:
    """세션 캐시 파일 관리자

    캐시 파일 위치 기본값: ~/.aws/session.yaml
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> dict[str, SessionCredential]:
        """세션 캐시 로드

        Returns:
            {계정 이름: SessionCredential} (파일이 없으면 빈 딕셔너리)

        Raises:
            ConfigParseError: 캐시 파일 형식 오류
        """
        from ..config.loader import load_session_cache

        return load_session_cache(self.path)

    def save(self, sessions: dict[str, SessionCredential]) -> None:
        """세션 캐시를 파일에 저장 (전체 덮어쓰기)

        Args:
            sessions: 저장할 전체 세션 매핑

        Raises:
            FileWriteError: 파일 저장 실패 시
        """
        data = {name: credential.to_dict() for name, credential in sessions.items()}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            os.chmod(self.path, SESSION_CACHE_FILE_MODE)
        except OSError as e:
            raise FileWriteError(self.path, cause=e) from e

        logger.info("세션 캐시 저장: %s (%d개)", self.path, len(data))

    def exists(self) -> bool:
        """캐시 파일 존재 여부"""
        return self.path.exists()
