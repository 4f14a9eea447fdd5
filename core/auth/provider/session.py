"""
core/auth/provider/session.py - 마스터 계정 세션 자격증명 갱신

각 마스터 계정에 대해 캐시된 세션 자격증명이 아직 유효하면 그대로 두고,
만료됐거나 없으면 sts:GetSessionToken으로 새로 발급받습니다.

처리 순서 (계정은 설정 순서대로):
    1. store.is_valid(name, now) → 건너뜀 (네트워크 호출 없음)
    2. 리전/정적 키(또는 기본 자격증명 체인)로 STS client 생성
    3. mfa_arn이 있으면 OTP 입력을 받아 SerialNumber/TokenCode와 함께 요청
    4. 결과를 계정 이름으로 저장 (기존 항목 덮어쓰기)
    5. 실패는 잡지 않음 - CredentialRequestError가 실행 전체를 중단
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..types import SessionCredential
from .client import get_session_token, make_client_factory

if TYPE_CHECKING:
    from core.config import Settings

    from ..cache import CredentialStore
    from ..types import AccountSpec
    from .client import ClientFactory

logger = logging.getLogger(__name__)

# (계정 이름, MFA ARN) -> OTP 코드
MfaPrompt = Callable[[str, str], str]
Clock = Callable[[], datetime]


def console_mfa_prompt(account_name: str, mfa_arn: str) -> str:
    """표준 입출력 MFA 프롬프트

    stdout에 계정과 디바이스 ARN을 출력하고 stdin에서 한 줄을 읽습니다.
    타임아웃 없이 입력을 기다립니다.
    """
    print(f"Enter MFA token code for {account_name} using {mfa_arn}", flush=True)
    return input()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionRefresher:
    """마스터 계정 세션 자격증명 갱신기

    Example:
        refresher = SessionRefresher(settings)
        refreshed = refresher.refresh(config.accounts, store)
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory | None = None,
        mfa_prompt: MfaPrompt = console_mfa_prompt,
        clock: Clock = utc_now,
    ):
        """SessionRefresher 초기화

        Args:
            settings: 기본 리전/유지 시간 설정
            client_factory: STS client 생성 함수 (기본: get_sts_client)
            mfa_prompt: MFA 코드 입력 함수 (테스트에서 대체)
            clock: 현재 시각 함수 (UTC)
        """
        self.settings = settings
        self.client_factory = client_factory or make_client_factory(settings)
        self.mfa_prompt = mfa_prompt
        self.clock = clock

    def refresh(self, accounts: Iterable[AccountSpec], store: CredentialStore) -> list[str]:
        """모든 계정의 세션 자격증명 확인 및 갱신

        Args:
            accounts: 마스터 계정 목록 (설정 순서)
            store: 자격증명 저장소 (갱신된 항목으로 업데이트됨)

        Returns:
            새로 발급받은 계정 이름 목록

        Raises:
            CredentialRequestError: STS 요청 실패 (즉시 중단)
        """
        refreshed: list[str] = []

        for account in accounts:
            now = self.clock()
            if store.is_valid(account.name, now):
                logger.debug(
                    "세션 재사용: %s (남은 시간 %ss)",
                    account.name,
                    store.remaining_seconds(account.name, now),
                )
                continue

            store.put(account.name, self.request(account))
            refreshed.append(account.name)

        return refreshed

    def request(self, account: AccountSpec) -> SessionCredential:
        """단일 계정의 세션 토큰 발급

        Raises:
            CredentialRequestError: STS 요청 실패
        """
        region = account.resolve_region(self.settings)
        duration = account.resolve_duration(self.settings)

        if account.has_static_credentials:
            client = self.client_factory(
                region,
                access_key_id=account.access_key_id,
                secret_access_key=account.secret_access_key,
            )
        else:
            client = self.client_factory(region)

        if account.mfa_arn:
            code = self.mfa_prompt(account.name, account.mfa_arn).rstrip()
            logger.debug("MFA 세션 토큰 요청: %s (%s)", account.name, account.mfa_arn)
            credentials = get_session_token(
                client,
                account.name,
                duration,
                mfa_arn=account.mfa_arn,
                mfa_code=code,
            )
        else:
            logger.debug("세션 토큰 요청: %s", account.name)
            credentials = get_session_token(client, account.name, duration)

        session = SessionCredential.from_sts(credentials, region)
        logger.info("세션 갱신: %s (만료 %s)", account.name, session.expiration.isoformat())
        return session
