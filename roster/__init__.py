"""roster — Member/Team 데이터 접근 계층.

Member/Team relational data-access layer built on async SQLAlchemy.
"""
