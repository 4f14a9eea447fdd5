# core/auth/cache/__init__.py
"""
자격증명 저장소 및 세션 캐시 관리 모듈

캐시 전략:
- CredentialStore: 메모리 기반 - 세션/역할 자격증명, 만료 시간 기반 유효성
- SessionCacheManager: 파일 기반 (~/.aws/session.yaml) - 세션 자격증명만 저장

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "CredentialStore",
    "SessionCacheManager",
]

_IMPORT_MAPPING = {
    "CredentialStore": (".cache", "CredentialStore"),
    "SessionCacheManager": (".cache", "SessionCacheManager"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
