# core/auth/config/__init__.py
"""
계정/역할 설정 파일(config.yaml)과 세션 캐시(session.yaml) 파싱 모듈

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    # Data classes
    "ParsedConfig",
    # Classes
    "Loader",
    # Functions
    "load_config",
    "load_session_cache",
]

_IMPORT_MAPPING = {
    "ParsedConfig": (".loader", "ParsedConfig"),
    "Loader": (".loader", "Loader"),
    "load_config": (".loader", "load_config"),
    "load_session_cache": (".loader", "load_session_cache"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
