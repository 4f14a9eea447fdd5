"""
core/auth/auth.py - 자격증명 갱신 실행 관리자

한 번의 실행(run)을 다음 순서로 진행합니다:

    1. config.yaml 로드 + 세션 캐시 로드
    2. SessionRefresher: 마스터 계정 세션 확인/갱신
    3. 세션 캐시 즉시 저장 (이후 역할 단계가 실패해도 새 세션 토큰 보존)
    4. RoleAssumer: 역할 자격증명 발급
    5. ProfileWriter: config/credentials 백업 후 전체 교체

어느 단계에서든 예외가 발생하면 그대로 전파되어 실행이 중단됩니다.
역할 단계에서 실패하면 세션 캐시는 이미 갱신된 상태이고
config/credentials 파일은 변경되지 않습니다.

Usage:
    from core.auth import create_manager

    manager = create_manager()
    result = manager.run()
    print(result.refreshed_sessions, result.assumed_roles)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .cache import CredentialStore, SessionCacheManager
from .config import Loader
from .output import ProfileWriter
from .provider import RoleAssumer, SessionRefresher

if TYPE_CHECKING:
    from core.config import Settings

    from .config import ParsedConfig
    from .provider.client import ClientFactory
    from .provider.session import Clock, MfaPrompt
    from .types import SessionCredential

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """실행 결과 요약

    Attributes:
        refreshed_sessions: 새로 발급받은 세션의 계정 이름
        reused_sessions: 캐시를 재사용한 계정 이름
        assumed_roles: 발급한 역할 이름
        written_files: 기록한 파일 (세션 캐시 포함)
    """

    refreshed_sessions: list[str] = field(default_factory=list)
    reused_sessions: list[str] = field(default_factory=list)
    assumed_roles: list[str] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)


@dataclass
class SessionStatus:
    """세션 캐시 상태 (status 명령용)

    Attributes:
        name: 계정 이름
        configured: config.yaml에 정의된 계정인지 여부
        credential: 캐시된 세션 (없으면 None)
        remaining_seconds: 남은 유효 시간 (캐시 없으면 None, 만료 시 0)
    """

    name: str
    configured: bool
    credential: SessionCredential | None = None
    remaining_seconds: int | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.remaining_seconds)


class Manager:
    """자격증명 갱신 관리자

    각 컴포넌트는 생성자에서 같은 Settings를 전달받습니다.
    client_factory/mfa_prompt/clock은 테스트에서 대체할 수 있습니다.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory | None = None,
        mfa_prompt: MfaPrompt | None = None,
        clock: Clock | None = None,
    ):
        self.settings = settings
        self.loader = Loader(settings.CONFIG_IN_FILE)
        self.session_cache = SessionCacheManager(settings.SESSION_CACHE_FILE)

        refresher_kwargs: dict = {"client_factory": client_factory}
        if mfa_prompt is not None:
            refresher_kwargs["mfa_prompt"] = mfa_prompt
        if clock is not None:
            refresher_kwargs["clock"] = clock

        self.refresher = SessionRefresher(settings, **refresher_kwargs)
        self.assumer = RoleAssumer(settings, client_factory=client_factory)
        self.writer = ProfileWriter(settings)

        self.config: ParsedConfig | None = None
        self.store: CredentialStore | None = None

    def load(self) -> tuple[ParsedConfig, CredentialStore]:
        """설정과 세션 캐시 로드

        Raises:
            ConfigMissingError, ConfigParseError, UnresolvedAccountReferenceError
        """
        self.config = self.loader.load()
        self.store = CredentialStore(self.session_cache.load())
        return self.config, self.store

    def run(self) -> RunResult:
        """전체 갱신 실행 (generate + save)

        Raises:
            RoleCredsError: 모든 치명적 오류
        """
        config, store = self.load()
        result = RunResult()

        result.refreshed_sessions = self.refresher.refresh(config.accounts, store)
        result.reused_sessions = [
            a.name for a in config.accounts if a.name not in result.refreshed_sessions
        ]

        # 역할 단계 전에 저장 - 변경이 없어도 항상 기록
        self.session_cache.save(store.sessions)
        result.written_files.append(self.session_cache.path)

        result.assumed_roles = self.assumer.assume(config.roles, store)
        result.written_files.extend(self.writer.write(store))

        logger.info(
            "갱신 완료: 세션 %d개 발급, %d개 재사용, 역할 %d개",
            len(result.refreshed_sessions),
            len(result.reused_sessions),
            len(result.assumed_roles),
        )
        return result

    def session_status(self) -> list[SessionStatus]:
        """세션 캐시 상태 조회 (STS 호출 없음, 파일 변경 없음)

        설정된 계정을 설정 순서대로, 그 뒤에 설정에 없는 캐시 항목을 반환합니다.
        """
        config, store = self.load()
        now = self.refresher.clock()

        names = [a.name for a in config.accounts]
        names += [name for name in store.sessions if name not in names]
        configured = {a.name for a in config.accounts}

        return [
            SessionStatus(
                name=name,
                configured=name in configured,
                credential=store.get(name),
                remaining_seconds=store.remaining_seconds(name, now),
            )
            for name in names
        ]


def create_manager(settings: Settings | None = None, **kwargs) -> Manager:
    """Manager 생성 헬퍼

    Args:
        settings: 설정 (None이면 환경변수를 반영한 기본 설정)
        **kwargs: Manager에 전달할 추가 인자
    """
    if settings is None:
        from core.config import Settings

        settings = Settings.from_env()
    return Manager(settings, **kwargs)
