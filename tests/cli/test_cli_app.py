# tests/cli/test_cli_app.py
"""
cli/app.py 단위 테스트

CLI 메인 엔트리포인트 (refresh, status, init) 테스트.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from cli.app import EXAMPLE_CONFIG, cli
from core.auth.cache import SessionCacheManager
from core.auth.types import SessionCredential

ROLE_ARN = "arn:aws:iam::123456789012:role/Admin"


@pytest.fixture
def runner():
    """Click CliRunner"""
    return CliRunner()


@pytest.fixture
def patched_sts(fake_client_factory):
    """SessionRefresher/RoleAssumer가 mock client를 사용하도록 교체"""
    with (
        patch("core.auth.provider.session.make_client_factory", return_value=fake_client_factory),
        patch("core.auth.provider.role.make_client_factory", return_value=fake_client_factory),
    ):
        yield fake_client_factory


def path_args(settings) -> list[str]:
    return [
        "-c",
        str(settings.CONFIG_IN_FILE),
        "--session-cache",
        str(settings.SESSION_CACHE_FILE),
        "--config-out",
        str(settings.CONFIG_OUT_FILE),
        "--credentials-out",
        str(settings.CREDENTIALS_OUT_FILE),
    ]


# =============================================================================
# CLI 그룹 테스트
# =============================================================================


class TestCLI:
    """CLI 그룹 테스트"""

    def test_version_option(self, runner):
        """--version 옵션 테스트"""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "aws-role-creds" in result.output

    def test_help_option(self, runner):
        """--help 옵션 테스트"""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("refresh", "status", "init"):
            assert command in result.output

    def test_invoke_without_command_runs_refresh(self, runner, monkeypatch, tmp_path, patched_sts, mock_sts_client):
        """서브명령어 없이 실행 시 refresh (기본 경로 ~/.aws)"""
        monkeypatch.setenv("HOME", str(tmp_path))
        aws_dir = tmp_path / ".aws"
        aws_dir.mkdir()
        (aws_dir / "config.yaml").write_text(yaml.safe_dump({"default": [{"name": "m1"}]}), encoding="utf-8")

        result = runner.invoke(cli, [])

        assert result.exit_code == 0, result.output
        mock_sts_client.get_session_token.assert_called_once()
        assert (aws_dir / "session.yaml").exists()
        assert (aws_dir / "config").exists()
        assert (aws_dir / "credentials").exists()


# =============================================================================
# refresh 테스트
# =============================================================================


class TestRefreshCommand:
    """refresh 명령 테스트"""

    def test_refresh_success(self, runner, settings, write_config, patched_sts, mock_sts_client):
        """세션/역할 발급 후 요약 출력"""
        write_config(
            {
                "default": [{"name": "m1"}],
                "profiles": [{"name": "r1", "default": "m1", "role_arn": ROLE_ARN}],
            }
        )

        result = runner.invoke(cli, ["--lang", "en", "refresh", *path_args(settings)])

        assert result.exit_code == 0, result.output
        assert "Session refreshed: m1" in result.output
        assert "Assumed role: r1" in result.output
        assert str(settings.CREDENTIALS_OUT_FILE) in result.output
        mock_sts_client.assume_role.assert_called_once()

    def test_region_option(self, runner, settings, write_config, patched_sts):
        """--region은 리전 미지정 항목의 기본값"""
        write_config({"default": [{"name": "m1"}]})

        result = runner.invoke(cli, ["refresh", *path_args(settings), "--region", "us-east-2"])

        assert result.exit_code == 0, result.output
        patched_sts.assert_called_once_with("us-east-2")
        assert "region = us-east-2" in settings.CONFIG_OUT_FILE.read_text(encoding="utf-8")

    def test_reused_session(self, runner, settings, write_config, patched_sts, mock_sts_client):
        """유효한 캐시는 재사용"""
        write_config({"default": [{"name": "m1"}]})
        expiration = datetime.now(timezone.utc) + timedelta(hours=1)
        SessionCacheManager(settings.SESSION_CACHE_FILE).save(
            {"m1": SessionCredential("K", "S", "T", expiration, "eu-west-1")}
        )

        result = runner.invoke(cli, ["--lang", "en", "refresh", *path_args(settings)])

        assert result.exit_code == 0, result.output
        assert "Session reused (cache valid): m1" in result.output
        mock_sts_client.get_session_token.assert_not_called()

    def test_mfa_code_from_stdin(self, runner, settings, write_config, patched_sts, mock_sts_client):
        """MFA 코드는 표준 입력에서 읽음"""
        write_config({"default": [{"name": "m1", "mfa_arn": "arn:aws:iam::1:mfa/me"}]})

        result = runner.invoke(cli, ["--lang", "en", "refresh", *path_args(settings)], input="123456\n")

        assert result.exit_code == 0, result.output
        assert "Enter MFA token code for m1" in result.output
        assert mock_sts_client.get_session_token.call_args.kwargs["TokenCode"] == "123456"

    def test_missing_config(self, runner, settings, patched_sts):
        """설정 파일 없으면 종료 코드 1, 파일 변경 없음"""
        result = runner.invoke(cli, ["refresh", *path_args(settings)])

        assert result.exit_code == 1
        assert "aws-role-creds init" in result.output
        assert not settings.SESSION_CACHE_FILE.exists()
        assert not settings.CONFIG_OUT_FILE.exists()
        assert not settings.CREDENTIALS_OUT_FILE.exists()

    def test_unresolved_reference(self, runner, settings, write_config, patched_sts):
        """정의되지 않은 계정 참조"""
        write_config({"profiles": [{"name": "r1", "default": "ghost", "role_arn": ROLE_ARN}]})

        result = runner.invoke(cli, ["refresh", *path_args(settings)])

        assert result.exit_code == 1
        assert "ghost" in result.output
        assert not settings.CONFIG_OUT_FILE.exists()


# =============================================================================
# status 테스트
# =============================================================================


class TestStatusCommand:
    """status 명령 테스트"""

    def test_status_table(self, runner, settings, write_config):
        """캐시 상태 테이블"""
        write_config({"default": [{"name": "m1"}, {"name": "m2"}]})
        expiration = datetime.now(timezone.utc) + timedelta(hours=2)
        SessionCacheManager(settings.SESSION_CACHE_FILE).save(
            {"m1": SessionCredential("K", "S", "T", expiration, "us-east-1")}
        )

        result = runner.invoke(
            cli,
            [
                "--lang",
                "en",
                "status",
                "-c",
                str(settings.CONFIG_IN_FILE),
                "--session-cache",
                str(settings.SESSION_CACHE_FILE),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "m1" in result.output
        assert "m2" in result.output
        assert "us-east-1" in result.output
        assert "missing" in result.output

    def test_status_missing_config(self, runner, settings):
        """설정 파일 없으면 종료 코드 1"""
        result = runner.invoke(cli, ["status", "-c", str(settings.CONFIG_IN_FILE)])

        assert result.exit_code == 1

    def test_status_empty(self, runner, settings, write_config):
        """계정/캐시 모두 없음"""
        write_config("")

        result = runner.invoke(
            cli,
            [
                "--lang",
                "en",
                "status",
                "-c",
                str(settings.CONFIG_IN_FILE),
                "--session-cache",
                str(settings.SESSION_CACHE_FILE),
            ],
        )

        assert result.exit_code == 0
        assert "No configured accounts" in result.output


# =============================================================================
# init 테스트
# =============================================================================


class TestInitCommand:
    """init 명령 테스트"""

    def test_init_creates_example(self, runner, tmp_path):
        """예제 설정 파일 생성"""
        path = tmp_path / "new" / "config.yaml"

        result = runner.invoke(cli, ["init", "-c", str(path)])

        assert result.exit_code == 0, result.output
        assert path.read_text(encoding="utf-8") == EXAMPLE_CONFIG

    def test_example_is_loadable(self, tmp_path):
        """예제 설정은 그대로 로드 가능"""
        from core.auth.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text(EXAMPLE_CONFIG, encoding="utf-8")

        config = load_config(path)

        assert [a.name for a in config.accounts] == ["master"]
        assert [r.name for r in config.roles] == ["dev"]

    def test_init_refuses_overwrite(self, runner, tmp_path):
        """기존 파일은 덮어쓰지 않음"""
        path = tmp_path / "config.yaml"
        path.write_text("default: []\n", encoding="utf-8")

        result = runner.invoke(cli, ["init", "-c", str(path)])

        assert result.exit_code == 1
        assert path.read_text(encoding="utf-8") == "default: []\n"
