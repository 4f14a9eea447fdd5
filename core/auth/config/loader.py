"""
core/auth/config/loader.py - 계정/역할 설정 및 세션 캐시 로더

config.yaml 형식:

    default:                      # 마스터 계정 (세션 토큰 발급)
      - name: master
        region: eu-west-1         # 옵션
        duration: 86400           # 옵션 (초)
        id: AKIA...               # 옵션 (id/key 없으면 기본 자격증명 체인)
        key: ...
        mfa_arn: arn:aws:iam::111111111111:mfa/me   # 옵션
    profiles:                     # 역할 프로파일 (세션으로 AssumeRole)
      - name: prod-admin
        default: master
        role_arn: arn:aws:iam::222222222222:role/Admin
        region: eu-west-1         # 옵션
        duration: 3600            # 옵션 (초)

session.yaml 형식:

    master:
      access_key_id: ASIA...
      secret_access_key: ...
      session_token: ...
      expiration: '2024-01-01T00:00:00+00:00'
      region: eu-west-1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigMissingError, ConfigParseError, UnresolvedAccountReferenceError

from ..types import AccountSpec, RoleSpec, SessionCredential

logger = logging.getLogger(__name__)

# YAML 최상위 키
ACCOUNTS_KEY = "default"
ROLES_KEY = "profiles"


@dataclass
class ParsedConfig:
    """파싱된 설정 전체

    Attributes:
        accounts: 마스터 계정 목록 (설정 순서 유지)
        roles: 역할 프로파일 목록 (설정 순서 유지)
    """

    accounts: list[AccountSpec] = field(default_factory=list)
    roles: list[RoleSpec] = field(default_factory=list)

    def get_account(self, name: str) -> AccountSpec | None:
        return next((a for a in self.accounts if a.name == name), None)

    def get_role(self, name: str) -> RoleSpec | None:
        return next((r for r in self.roles if r.name == name), None)

    def validate_references(self) -> None:
        """모든 역할의 default 계정이 정의되어 있는지 확인

        Raises:
            UnresolvedAccountReferenceError: 정의되지 않은 계정 참조
        """
        account_names = {a.name for a in self.accounts}
        for role in self.roles:
            if role.default_account not in account_names:
                raise UnresolvedAccountReferenceError(role.name, role.default_account)


def _read_yaml(path: Path) -> Any:
    """YAML 파일 로드 (파싱 실패는 ConfigParseError)"""
    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParseError(path, "YAML 형식이 올바르지 않습니다", cause=e) from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, "UTF-8로 읽을 수 없는 파일입니다", cause=e) from e


def _optional_str(record: dict[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(path: Path, record: dict[str, Any], key: str) -> int | None:
    value = record.get(key)
    if value is None:
        return None
    # bool은 int의 서브클래스
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigParseError(path, f"'{key}' 값은 정수(초)여야 합니다: {value!r}")
    if value <= 0:
        raise ConfigParseError(path, f"'{key}' 값은 0보다 커야 합니다: {value}")
    return value


def _required_str(path: Path, record: dict[str, Any], key: str, section: str) -> str:
    value = record.get(key)
    if value is None or value == "":
        raise ConfigParseError(path, f"{section} 항목에 '{key}' 필드가 필요합니다: {record}")
    return str(value)


class Loader:
    """config.yaml 로더

    Example:
        loader = Loader(Path("~/.aws/config.yaml").expanduser())
        config = loader.load()
        for account in config.accounts:
            print(account.name)
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> ParsedConfig:
        """설정 파일 로드 및 검증

        Raises:
            ConfigMissingError: 파일이 없음
            ConfigParseError: YAML 형식 또는 필드 오류
            UnresolvedAccountReferenceError: 역할이 정의되지 않은 계정을 참조
        """
        if not self.path.exists():
            raise ConfigMissingError(self.path)

        data = _read_yaml(self.path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(self.path, "최상위 구조는 매핑이어야 합니다")

        config = ParsedConfig(
            accounts=[self._parse_account(r) for r in self._section(data, ACCOUNTS_KEY)],
            roles=[self._parse_role(r) for r in self._section(data, ROLES_KEY)],
        )

        self._check_unique(ACCOUNTS_KEY, [a.name for a in config.accounts])
        self._check_unique(ROLES_KEY, [r.name for r in config.roles])
        config.validate_references()

        logger.debug(
            "설정 로드 완료: %s (계정 %d개, 역할 %d개)",
            self.path,
            len(config.accounts),
            len(config.roles),
        )
        return config

    def _section(self, data: dict[str, Any], key: str) -> list[dict[str, Any]]:
        records = data.get(key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise ConfigParseError(self.path, f"'{key}'는 목록이어야 합니다")
        for record in records:
            if not isinstance(record, dict):
                raise ConfigParseError(self.path, f"'{key}' 항목은 매핑이어야 합니다: {record!r}")
        return records

    def _check_unique(self, section: str, names: list[str]) -> None:
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise ConfigParseError(self.path, f"'{section}'에 중복된 이름이 있습니다: {name}")
            seen.add(name)

    def _parse_account(self, record: dict[str, Any]) -> AccountSpec:
        return AccountSpec(
            name=_required_str(self.path, record, "name", ACCOUNTS_KEY),
            region=_optional_str(record, "region"),
            duration=_optional_int(self.path, record, "duration"),
            access_key_id=_optional_str(record, "id"),
            secret_access_key=_optional_str(record, "key"),
            mfa_arn=_optional_str(record, "mfa_arn"),
        )

    def _parse_role(self, record: dict[str, Any]) -> RoleSpec:
        return RoleSpec(
            name=_required_str(self.path, record, "name", ROLES_KEY),
            default_account=_required_str(self.path, record, "default", ROLES_KEY),
            role_arn=_required_str(self.path, record, "role_arn", ROLES_KEY),
            region=_optional_str(record, "region"),
            duration=_optional_int(self.path, record, "duration"),
        )


# =============================================================================
# 모듈 레벨 편의 함수
# =============================================================================


def load_config(path: Path | str) -> ParsedConfig:
    """config.yaml 로드 (Loader(path).load()와 동일)"""
    return Loader(path).load()


def load_session_cache(path: Path | str) -> dict[str, SessionCredential]:
    """세션 캐시 로드

    파일이 없거나 비어 있으면 빈 딕셔너리를 반환합니다 (에러 아님).

    Raises:
        ConfigParseError: YAML 형식 또는 레코드 형식 오류
    """
    path = Path(path)
    if not path.exists():
        logger.debug("세션 캐시 없음: %s", path)
        return {}

    data = _read_yaml(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(path, "세션 캐시 최상위 구조는 매핑이어야 합니다")

    sessions: dict[str, SessionCredential] = {}
    for name, record in data.items():
        if not isinstance(record, dict):
            raise ConfigParseError(path, f"세션 '{name}' 항목은 매핑이어야 합니다")
        try:
            sessions[str(name)] = SessionCredential.from_dict(record)
        except KeyError as e:
            raise ConfigParseError(path, f"세션 '{name}'에 필드가 없습니다: {e.args[0]}", cause=e) from e
        except ValueError as e:
            raise ConfigParseError(path, f"세션 '{name}' 값이 올바르지 않습니다", cause=e) from e

    logger.debug("세션 캐시 로드 완료: %s (%d개)", path, len(sessions))
    return sessions
