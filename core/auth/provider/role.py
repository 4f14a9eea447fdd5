"""
core/auth/provider/role.py - 역할 자격증명 발급

각 역할 프로파일에 대해 참조하는 마스터 계정의 세션 자격증명으로
sts:AssumeRole을 호출합니다. 역할 자격증명은 유효성 검사 없이
매 실행마다 다시 발급됩니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from core.exceptions import UnresolvedAccountReferenceError

from ..types import RoleCredential
from .client import assume_role, make_client_factory

if TYPE_CHECKING:
    from core.config import Settings

    from ..cache import CredentialStore
    from ..types import RoleSpec
    from .client import ClientFactory

logger = logging.getLogger(__name__)


class RoleAssumer:
    """역할 자격증명 발급기

    SessionRefresher가 모든 세션을 확정한 뒤에만 호출해야 합니다.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory | None = None):
        self.settings = settings
        self.client_factory = client_factory or make_client_factory(settings)

    def assume(self, roles: Iterable[RoleSpec], store: CredentialStore) -> list[str]:
        """모든 역할 프로파일의 자격증명 발급

        Args:
            roles: 역할 프로파일 목록 (설정 순서)
            store: 자격증명 저장소 (세션 조회, 역할 저장)

        Returns:
            발급한 역할 이름 목록

        Raises:
            UnresolvedAccountReferenceError: 참조 계정의 세션이 저장소에 없음
            CredentialRequestError: STS 요청 실패 (즉시 중단)
        """
        assumed: list[str] = []
        for role in roles:
            store.put_role(role.name, self.request(role, store))
            assumed.append(role.name)
        return assumed

    def request(self, role: RoleSpec, store: CredentialStore) -> RoleCredential:
        """단일 역할의 AssumeRole 호출"""
        session = store.get(role.default_account)
        if session is None:
            raise UnresolvedAccountReferenceError(role.name, role.default_account)

        region = role.resolve_region(self.settings)
        client = self.client_factory(
            region,
            access_key_id=session.access_key_id,
            secret_access_key=session.secret_access_key,
            session_token=session.session_token,
        )

        logger.debug("역할 자격증명 요청: %s (%s, 세션 %s)", role.name, role.role_arn, role.default_account)
        credentials = assume_role(
            client,
            role.name,
            role.role_arn,
            role.resolve_duration(self.settings),
        )

        return RoleCredential.from_sts(credentials, region, role=role.role_arn)
