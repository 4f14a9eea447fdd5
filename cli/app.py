"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

주요 기능:
    - 세션/역할 자격증명 갱신 (서브명령 없이 실행 시 refresh)
    - 세션 캐시 상태 조회
    - 예제 config.yaml 생성
    - 버전 정보 표시

명령어 구조:
    aws-role-creds                  # refresh와 동일
    aws-role-creds --version        # 버전 표시
    aws-role-creds refresh [옵션]   # 자격증명 갱신 후 ~/.aws/config, credentials 기록
    aws-role-creds status           # 세션 캐시 남은 시간 표시
    aws-role-creds init             # 예제 config.yaml 생성

Usage:
    $ aws-role-creds
    $ aws-role-creds refresh -c ./config.yaml --region us-east-1
    $ aws-role-creds --lang en status

    # 모듈로 실행
    $ python -m cli.app
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가 (core 모듈 임포트를 위함)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402
from click import Context  # noqa: E402

from cli.i18n import t  # noqa: E402
from core.config import LogConfig, get_version  # noqa: E402

# WARNING 레벨로 설정하여 INFO 로그가 명령 출력에 섞이지 않도록 함
_log_config = LogConfig.from_env()
logging.basicConfig(
    level=_log_config.level,
    format=_log_config.format,
    datefmt=_log_config.date_format,
)

VERSION = get_version()

EXAMPLE_CONFIG = """\
# aws-role-creds 설정 파일
#
# default: 세션 토큰(GetSessionToken)을 발급받을 마스터 계정 목록
#   name      프로파일 이름 (필수)
#   region    STS 리전 (생략 시 기본 리전)
#   duration  세션 유지 시간(초, 생략 시 86400)
#   id, key   정적 액세스 키 (생략 시 기본 자격증명 체인 사용)
#   mfa_arn   MFA 디바이스 ARN (지정 시 실행할 때 OTP 입력)
#
# profiles: 마스터 계정 세션으로 위임받을 역할 목록
#   name      프로파일 이름 (필수)
#   default   사용할 마스터 계정 이름 (필수)
#   role_arn  역할 ARN (필수)
#   region    리전 (생략 시 기본 리전)
#   duration  역할 유지 시간(초, 생략 시 3600)

default:
  - name: master
    region: eu-west-1
    id: AKIAEXAMPLE
    key: secret-key-example
    mfa_arn: arn:aws:iam::123456789012:mfa/user

profiles:
  - name: dev
    default: master
    role_arn: arn:aws:iam::210987654321:role/Developer
"""


def _build_settings(
    config_file: str | None = None,
    session_cache: str | None = None,
    config_out: str | None = None,
    credentials_out: str | None = None,
    region: str | None = None,
):
    """환경변수 설정 위에 CLI 옵션을 덮어쓴 Settings 생성"""
    from core.config import Settings

    return Settings.from_env().with_overrides(
        CONFIG_IN_FILE=config_file,
        SESSION_CACHE_FILE=session_cache,
        CONFIG_OUT_FILE=config_out,
        CREDENTIALS_OUT_FILE=credentials_out,
        DEFAULT_REGION=region,
    )


def _fail(error: Exception) -> None:
    """에러 메시지 출력 후 종료 코드 1로 종료"""
    from rich.markup import escape

    from cli.ui.console import print_error, print_sub_info
    from core.exceptions import ConfigMissingError, format_error_for_user

    # 에러 메시지의 [account m1] 등은 Rich 마크업이 아님
    print_error(escape(format_error_for_user(error)))
    if isinstance(error, ConfigMissingError):
        print_sub_info(t("cli.config_missing_hint"))
    raise SystemExit(1)


def config_option(func):
    return click.option(
        "-c",
        "--config",
        "config_file",
        type=click.Path(dir_okay=False),
        default=None,
        help="계정/역할 정의 YAML 파일 (기본: ~/.aws/config.yaml)",
    )(func)


@click.group(invoke_without_command=True)
@click.version_option(VERSION, prog_name="aws-role-creds")
@click.option(
    "--lang",
    type=click.Choice(["ko", "en"]),
    default="ko",
    help="UI 언어 설정 / UI language (ko: 한국어, en: English)",
)
@click.pass_context
def cli(ctx: Context, lang: str) -> None:
    """aws-role-creds - AWS 임시 자격증명 갱신 도구

    \b
    마스터 계정의 세션 토큰을 캐시/갱신하고 역할 자격증명을 발급받아
    ~/.aws/config 와 ~/.aws/credentials 에 기록합니다.
    """
    from cli.i18n import set_lang

    set_lang(lang)

    ctx.ensure_object(dict)
    ctx.obj["lang"] = lang

    if ctx.invoked_subcommand is None:
        ctx.invoke(refresh_command)


@cli.command("refresh")
@config_option
@click.option("--session-cache", default=None, type=click.Path(dir_okay=False), help="세션 캐시 YAML 파일")
@click.option("--config-out", default=None, type=click.Path(dir_okay=False), help="출력 AWS config 파일")
@click.option(
    "--credentials-out", default=None, type=click.Path(dir_okay=False), help="출력 AWS credentials 파일"
)
@click.option("--region", default=None, help="리전 미지정 항목에 사용할 기본 리전")
@click.option("-v", "--verbose", is_flag=True, help="상세 로그 출력")
def refresh_command(
    config_file: str | None = None,
    session_cache: str | None = None,
    config_out: str | None = None,
    credentials_out: str | None = None,
    region: str | None = None,
    verbose: bool = False,
) -> None:
    """세션/역할 자격증명 갱신 후 AWS 설정 파일 기록"""
    from cli.ui.console import get_logger, print_info, print_sub_info, print_success, prompt_mfa_code
    from core.auth import create_manager
    from core.exceptions import RoleCredsError

    if verbose:
        get_logger("core", logging.DEBUG)

    settings = _build_settings(config_file, session_cache, config_out, credentials_out, region)
    manager = create_manager(settings, mfa_prompt=prompt_mfa_code)

    try:
        result = manager.run()
    except RoleCredsError as e:
        _fail(e)
        return

    for name in result.refreshed_sessions:
        print_success(t("cli.session_refreshed", name=name))
    for name in result.reused_sessions:
        print_info(t("cli.session_reused", name=name))
    for name in result.assumed_roles:
        print_success(t("cli.role_assumed", name=name))

    print_success(t("cli.refresh_done"))
    for path in result.written_files:
        print_sub_info(str(path))


@cli.command("status")
@config_option
@click.option("--session-cache", default=None, type=click.Path(dir_okay=False), help="세션 캐시 YAML 파일")
def status_command(config_file: str | None, session_cache: str | None) -> None:
    """세션 캐시 상태 표시 (STS 호출 없음)"""
    from rich.markup import escape

    from cli.ui.console import format_remaining, print_info, print_table
    from core.auth import create_manager
    from core.exceptions import RoleCredsError

    settings = _build_settings(config_file, session_cache)
    manager = create_manager(settings)

    try:
        statuses = manager.session_status()
    except RoleCredsError as e:
        _fail(e)
        return

    if not statuses:
        print_info(t("cli.status_empty"))
        return

    rows = []
    for status in statuses:
        credential = status.credential
        name = escape(status.name)
        if not status.configured:
            name = f"{name} [dim]{t('cli.status_unconfigured')}[/dim]"
        remaining = format_remaining(status.remaining_seconds)
        rows.append(
            [
                name,
                credential.region if credential else "-",
                credential.expiration.isoformat() if credential else "-",
                f"[green]{remaining}[/green]" if status.is_valid else f"[red]{remaining}[/red]",
            ]
        )

    print_table(
        t("cli.status_title"),
        [t("cli.col_account"), t("cli.col_region"), t("cli.col_expiration"), t("cli.col_remaining")],
        rows,
    )


@cli.command("init")
@config_option
def init_command(config_file: str | None) -> None:
    """예제 config.yaml 생성 (기존 파일은 덮어쓰지 않음)"""
    from cli.ui.console import print_error, print_success
    from core.exceptions import FileWriteError

    path = _build_settings(config_file).CONFIG_IN_FILE
    if path.exists():
        print_error(t("cli.init_exists", path=path))
        raise SystemExit(1)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    except OSError as e:
        _fail(FileWriteError(path, e))
        return

    print_success(t("cli.init_done", path=path))


if __name__ == "__main__":
    cli()
