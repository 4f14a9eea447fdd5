# cli/ui/__init__.py
"""
CLI UI 컴포넌트

Rich 기반 콘솔 출력 헬퍼를 제공합니다.
"""

from .console import (
    console,
    format_remaining,
    get_console,
    get_logger,
    print_error,
    print_info,
    print_sub_info,
    print_success,
    print_table,
    print_warning,
    prompt_mfa_code,
)

__all__: list[str] = [
    "console",
    "format_remaining",
    "get_console",
    "get_logger",
    "print_error",
    "print_info",
    "print_sub_info",
    "print_success",
    "print_table",
    "print_warning",
    "prompt_mfa_code",
]
