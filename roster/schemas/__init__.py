"""Pydantic 스키마 패키지 — DTO 및 요청/응답 모델.

Pydantic schema package — DTOs and request/response models.
"""
