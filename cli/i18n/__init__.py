"""
cli/i18n - CLI 출력 메시지 다국어 처리

메시지 키는 "<네임스페이스>.<키>" 형식이며 네임스페이스별 카탈로그에서 찾습니다.
언어는 --lang 옵션으로 정한 값을 ContextVar에 보관합니다 (기본: 한국어).

Usage:
    from cli.i18n import set_lang, t

    set_lang("en")
    t("cli.session_refreshed", name="master")  # "Session refreshed: master"
"""

from __future__ import annotations

from contextvars import ContextVar

from cli.i18n.messages.cli_commands import CLI_MESSAGES

SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "ko"

_CATALOGS: dict[str, dict[str, dict[str, str]]] = {
    "cli": CLI_MESSAGES,
}

_lang: ContextVar[str] = ContextVar("lang", default=DEFAULT_LANG)


def get_lang() -> str:
    return _lang.get()


def set_lang(lang: str) -> None:
    """표시 언어 설정 (지원하지 않는 코드는 한국어)"""
    _lang.set(lang if lang in SUPPORTED_LANGS else DEFAULT_LANG)


def t(key: str, lang: str | None = None, **kwargs: object) -> str:
    """메시지 키를 현재 언어 문자열로 변환

    Args:
        key: "cli.refresh_done" 형식의 키
        lang: 지정 시 현재 언어 대신 사용
        **kwargs: 메시지 포맷 인자

    Returns:
        번역된 문자열. 키가 없으면 키 자체, 포맷 인자가 맞지 않으면 원본 템플릿
    """
    namespace, _, name = key.partition(".")
    entry = _CATALOGS.get(namespace, {}).get(name)
    if entry is None:
        return key

    text = entry.get(lang or get_lang()) or entry[DEFAULT_LANG]
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, IndexError):
        return text


__all__ = ["t", "get_lang", "set_lang", "SUPPORTED_LANGS", "DEFAULT_LANG"]
