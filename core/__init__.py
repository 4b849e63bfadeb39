"""
Spendwise 핵심 패키지

도메인 모델, 저장소, 내보내기, 설정, 로깅.
"""
