# core/auth/provider/__init__.py
"""
STS 자격증명 발급 모듈

구성:
- SessionRefresher: 마스터 계정 세션 토큰 확인/갱신 (GetSessionToken)
- RoleAssumer: 세션으로 역할 자격증명 발급 (AssumeRole)
- get_sts_client: STS client 생성 (재시도 없음)

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
"""

__all__ = [
    "SessionRefresher",
    "console_mfa_prompt",
    "RoleAssumer",
    "get_sts_client",
    "make_client_factory",
]

_IMPORT_MAPPING = {
    "SessionRefresher": (".session", "SessionRefresher"),
    "console_mfa_prompt": (".session", "console_mfa_prompt"),
    "RoleAssumer": (".role", "RoleAssumer"),
    "get_sts_client": (".client", "get_sts_client"),
    "make_client_factory": (".client", "make_client_factory"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
