"""
cli/i18n/messages - 네임스페이스별 메시지 카탈로그

각 모듈은 {키: {"ko": ..., "en": ...}} 딕셔너리를 정의합니다.
"""
