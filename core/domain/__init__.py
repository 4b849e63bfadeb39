"""
도메인 패키지

엔티티와 조회 기간 계산.
"""
