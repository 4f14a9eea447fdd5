# cli/__init__.py
"""
cli - aws-role-creds 명령줄 인터페이스

- app: Click 그룹 (refresh, status, init)
- ui: Rich 콘솔 출력
- i18n: 한국어/영어 메시지
"""
