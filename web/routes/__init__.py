"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 회원가입/로그인/비밀번호 재설정
- expenses: 지출 추가/삭제/조회/다운로드
- premium: 결제 주문 및 프리미엄 상태
- leaderboard: 지출 합계 순위
"""
