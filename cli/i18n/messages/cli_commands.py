"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for refresh/status/init command output.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # refresh
    # =========================================================================
    "session_refreshed": {
        "ko": "세션 갱신: {name}",
        "en": "Session refreshed: {name}",
    },
    "session_reused": {
        "ko": "세션 재사용 (캐시 유효): {name}",
        "en": "Session reused (cache valid): {name}",
    },
    "role_assumed": {
        "ko": "역할 자격증명 발급: {name}",
        "en": "Assumed role: {name}",
    },
    "refresh_done": {
        "ko": "자격증명 갱신 완료. 기록된 파일:",
        "en": "Credentials refreshed. Files written:",
    },
    "mfa_prompt": {
        "ko": "{name} MFA 코드 입력 ({arn})",
        "en": "Enter MFA token code for {name} using {arn}",
    },
    "config_missing_hint": {
        "ko": "'aws-role-creds init' 으로 예제 설정 파일을 생성할 수 있습니다.",
        "en": "Run 'aws-role-creds init' to create an example config file.",
    },
    # =========================================================================
    # status
    # =========================================================================
    "status_title": {
        "ko": "세션 캐시 상태",
        "en": "Session Cache Status",
    },
    "status_empty": {
        "ko": "설정된 계정과 캐시된 세션이 없습니다.",
        "en": "No configured accounts or cached sessions.",
    },
    "status_unconfigured": {
        "ko": "(설정에 없음)",
        "en": "(not configured)",
    },
    "status_missing": {
        "ko": "캐시 없음",
        "en": "missing",
    },
    "status_expired": {
        "ko": "만료됨",
        "en": "expired",
    },
    "remaining_hours": {
        "ko": "{hours}시간 {minutes}분",
        "en": "{hours}h {minutes}m",
    },
    "remaining_minutes": {
        "ko": "{minutes}분",
        "en": "{minutes}m",
    },
    "col_account": {
        "ko": "계정",
        "en": "Account",
    },
    "col_region": {
        "ko": "리전",
        "en": "Region",
    },
    "col_expiration": {
        "ko": "만료 시각",
        "en": "Expiration",
    },
    "col_remaining": {
        "ko": "남은 시간",
        "en": "Remaining",
    },
    # =========================================================================
    # init
    # =========================================================================
    "init_exists": {
        "ko": "설정 파일이 이미 존재합니다: {path}",
        "en": "Config file already exists: {path}",
    },
    "init_done": {
        "ko": "예제 설정 파일 생성: {path}",
        "en": "Example config file created: {path}",
    },
}
