"""
Web 패키지

FastAPI 앱, 라우터, 서비스, 스키마.
"""
