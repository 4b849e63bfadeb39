"""
Export Dispatcher

지출 변경 커밋 이후 Export Projector 실행을 백그라운드 태스크로 분리.

- 요청 응답은 내보내기 완료를 기다리지 않음
- 실패는 로그로만 남기고 호출자에게 전파하지 않음 (재시도 없음)
- 같은 사용자에 대한 실행이 겹치면 마지막 쓰기가 남음
"""

import asyncio
import logging

from core.domain.models import User
from core.errors import ExportFailure
from core.export.projector import ExportProjector

logger = logging.getLogger(__name__)


class ExportDispatcher:
    """Export Dispatcher

    실행 중인 태스크를 보관하여 GC로 인한 조기 종료를 막고,
    종료 시 drain()으로 남은 내보내기를 마무리.

    Args:
        projector: Export Projector

    사용 예시:
    ```python
    dispatcher = ExportDispatcher(projector)
    dispatcher.dispatch(user)   # 즉시 반환

    # 앱 종료 시
    await dispatcher.drain()
    ```
    """

    def __init__(self, projector: ExportProjector):
        self.projector = projector
        self._tasks: set[asyncio.Task[None]] = set()

        # 통계
        self._success_count = 0
        self._failure_count = 0

    @property
    def pending_count(self) -> int:
        """진행 중인 내보내기 수"""
        return len(self._tasks)

    @property
    def success_count(self) -> int:
        return self._success_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def dispatch(self, user: User) -> asyncio.Task[None]:
        """내보내기 실행 예약 (대기하지 않음)

        Args:
            user: 내보낼 사용자

        Returns:
            생성된 태스크 (테스트에서 대기할 때만 사용)
        """
        task = asyncio.create_task(
            self._run(user),
            name=f"export:{user.user_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, user: User) -> None:
        """내보내기 실행 (백그라운드)"""
        try:
            await self.projector.run(user)
            self._success_count += 1
        except asyncio.CancelledError:
            logger.warning(f"지출 내보내기 취소: {user.email}")
            raise
        except Exception as e:
            self._failure_count += 1
            failure = ExportFailure(f"Export failed for {user.email}: {e}")
            logger.error(
                str(failure),
                extra={"user_id": user.user_id, "error": repr(e)},
            )

    async def drain(self) -> None:
        """진행 중인 내보내기가 모두 끝날 때까지 대기"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
