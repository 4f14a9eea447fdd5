# core/__init__.py
"""
core - AWS 임시 자격증명 갱신 인프라

아키텍처:
    core/
    ├── auth/           # 세션/역할 자격증명 발급, 캐시, 출력
    │   ├── types/      # AccountSpec, RoleSpec, SessionCredential, RoleCredential
    │   ├── config/     # config.yaml, session.yaml 로더
    │   ├── cache/      # CredentialStore, SessionCacheManager
    │   ├── provider/   # SessionRefresher, RoleAssumer, STS client
    │   ├── output/     # ProfileWriter
    │   └── auth.py     # Manager (실행 순서 관리)
    ├── config.py       # 중앙 설정 관리 (Settings)
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings
    region = settings.DEFAULT_REGION  # "eu-west-1"

    # 예외 처리
    from core.exceptions import RoleCredsError, format_error_for_user
    try:
        create_manager().run()
    except RoleCredsError as e:
        print(format_error_for_user(e))

    # 실행
    from core.auth import create_manager
    result = create_manager().run()
"""

from core import auth, config, exceptions

__all__: list[str] = [
    # 서브패키지
    "auth",
    # 모듈
    "config",
    "exceptions",
]
