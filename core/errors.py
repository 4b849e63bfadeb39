"""
도메인 예외

서비스 계층에서 발생시키고 라우터에서 HTTP 상태로 변환.

- NotFoundError: 사용자/지출이 존재하지 않음 (404)
- ValidationError: 필수 값 누락/형식 오류 (400)
- ConflictError: 중복 데이터 (400)
- AuthFailure: 인증 실패 (401)
- AtomicStepFailure: 원장+합계 트랜잭션 커밋 실패 (500)
- ExportFailure: 외부 저장소 내보내기 실패 (로그로만 관찰)
"""


class NotFoundError(Exception):
    """대상 엔티티 없음"""

    pass


class ValidationError(Exception):
    """요청 값 검증 실패"""

    pass


class ConflictError(Exception):
    """이미 존재하는 데이터"""

    pass


class AuthFailure(Exception):
    """인증 실패

    사용자 없음/비밀번호 불일치를 구분하지 않음.
    """

    pass


class AtomicStepFailure(Exception):
    """원자적 변경 단계 실패 (롤백 완료 상태)"""

    pass


class ExportFailure(Exception):
    """지출 내보내기 실패"""

    pass
