"""서비스 패키지 — 레포지토리 위의 얇은 애플리케이션 계층.

Service package — Thin application layer over the repositories.
"""
