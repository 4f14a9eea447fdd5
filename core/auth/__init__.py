# core/auth/__init__.py
"""
AWS 임시 자격증명 갱신 모듈 (core/auth)

마스터 계정의 세션 토큰(GetSessionToken)과 그 세션으로 위임받는
역할 자격증명(AssumeRole)을 발급/캐시하고 AWS CLI 형식 파일로 기록합니다.

서브패키지:
- types: AccountSpec, RoleSpec, SessionCredential, RoleCredential
- config: config.yaml / session.yaml 로더
- cache: CredentialStore(메모리), SessionCacheManager(파일)
- provider: SessionRefresher, RoleAssumer, STS client
- output: ProfileWriter (~/.aws/config, ~/.aws/credentials)

사용 예시:
    from core.auth import create_manager
    from core.config import Settings

    manager = create_manager(Settings(DEFAULT_REGION="eu-west-1"))
    result = manager.run()

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Types
    "AccountSpec",
    "RoleSpec",
    "SessionCredential",
    "RoleCredential",
    # Config
    "Loader",
    "ParsedConfig",
    "load_config",
    "load_session_cache",
    # Cache
    "CredentialStore",
    "SessionCacheManager",
    # Providers
    "SessionRefresher",
    "RoleAssumer",
    "get_sts_client",
    # Output
    "ProfileWriter",
    # Manager
    "Manager",
    "RunResult",
    "SessionStatus",
    "create_manager",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    # Types
    "AccountSpec": (".types", "AccountSpec"),
    "RoleSpec": (".types", "RoleSpec"),
    "SessionCredential": (".types", "SessionCredential"),
    "RoleCredential": (".types", "RoleCredential"),
    # Config
    "Loader": (".config", "Loader"),
    "ParsedConfig": (".config", "ParsedConfig"),
    "load_config": (".config", "load_config"),
    "load_session_cache": (".config", "load_session_cache"),
    # Cache
    "CredentialStore": (".cache", "CredentialStore"),
    "SessionCacheManager": (".cache", "SessionCacheManager"),
    # Providers
    "SessionRefresher": (".provider", "SessionRefresher"),
    "RoleAssumer": (".provider", "RoleAssumer"),
    "get_sts_client": (".provider", "get_sts_client"),
    # Output
    "ProfileWriter": (".output", "ProfileWriter"),
    # Manager
    "Manager": (".auth", "Manager"),
    "RunResult": (".auth", "RunResult"),
    "SessionStatus": (".auth", "SessionStatus"),
    "create_manager": (".auth", "create_manager"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드

    CLI 시작 시간 최적화를 위해 무거운 의존성(boto3 등)을
    실제 필요한 시점에만 로드합니다.
    """
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
