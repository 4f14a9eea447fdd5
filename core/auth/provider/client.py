"""
core/auth/provider/client.py - STS client 생성 및 호출 헬퍼

STS 경계(boundary)를 감싸는 얇은 계층입니다.
botocore 예외는 모두 CredentialRequestError로 래핑하며 재시도하지 않습니다.

주요 구성 요소:
- get_sts_client: 리전/자격증명이 지정된 STS client 생성 (재시도 비활성화)
- get_session_token: sts:GetSessionToken 호출
- assume_role: sts:AssumeRole 호출

Example:
    from core.auth.provider.client import get_sts_client, get_session_token

    sts = get_sts_client("eu-west-1")
    credentials = get_session_token(sts, "master", duration=86400)
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import CredentialRequestError

if TYPE_CHECKING:
    from core.config import Settings

# 재시도 없음: 일시적 실패도 실행 전체를 중단시킨다
STS_MAX_ATTEMPTS = 1
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초


class ClientFactory(Protocol):
    """STS client 생성 함수 시그니처 (테스트에서 대체 가능)"""

    def __call__(
        self,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        session_token: str | None = None,
    ) -> Any: ...


def get_sts_client(
    region: str,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    session_token: str | None = None,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
) -> Any:
    """STS client 생성

    Args:
        region: STS 리전
        access_key_id: 액세스 키 (None이면 기본 자격증명 체인 사용)
        secret_access_key: 시크릿 키
        session_token: 세션 토큰 (세션 자격증명으로 AssumeRole 할 때)
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)

    Returns:
        boto3 STS client
    """
    config = Config(
        retries={"max_attempts": STS_MAX_ATTEMPTS, "mode": "standard"},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    if access_key_id and secret_access_key:
        session = boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            aws_session_token=session_token,
            region_name=region,
        )
    else:
        session = boto3.Session(region_name=region)

    return session.client("sts", region_name=region, config=config)


def get_session_token(
    client: Any,
    account_name: str,
    duration: int,
    mfa_arn: str | None = None,
    mfa_code: str | None = None,
) -> dict[str, Any]:
    """sts:GetSessionToken 호출

    Args:
        client: STS client
        account_name: 에러 메시지에 표시할 계정 이름
        duration: DurationSeconds
        mfa_arn: MFA 디바이스 ARN (SerialNumber)
        mfa_code: MFA 일회용 코드 (TokenCode)

    Returns:
        응답의 Credentials 블록

    Raises:
        CredentialRequestError: STS 호출 실패
    """
    params: dict[str, Any] = {"DurationSeconds": duration}
    if mfa_arn:
        params["SerialNumber"] = mfa_arn
        params["TokenCode"] = mfa_code

    try:
        response = client.get_session_token(**params)
    except (ClientError, BotoCoreError) as e:
        raise CredentialRequestError.from_client_error(
            kind="account",
            name=account_name,
            operation="get_session_token",
            client_error=e,
        ) from e

    return response["Credentials"]


def assume_role(
    client: Any,
    role_name: str,
    role_arn: str,
    duration: int,
) -> dict[str, Any]:
    """sts:AssumeRole 호출

    RoleSessionName은 역할 프로파일 이름을 그대로 사용합니다.

    Returns:
        응답의 Credentials 블록

    Raises:
        CredentialRequestError: STS 호출 실패
    """
    try:
        response = client.assume_role(
            RoleArn=role_arn,
            RoleSessionName=role_name,
            DurationSeconds=duration,
        )
    except (ClientError, BotoCoreError) as e:
        raise CredentialRequestError.from_client_error(
            kind="role",
            name=role_name,
            operation="assume_role",
            client_error=e,
        ) from e

    return response["Credentials"]


def make_client_factory(settings: Settings) -> ClientFactory:
    """Settings의 타임아웃이 적용된 get_sts_client 반환"""
    return partial(
        get_sts_client,
        connect_timeout=settings.STS_CONNECT_TIMEOUT,
        read_timeout=settings.STS_READ_TIMEOUT,
    )
