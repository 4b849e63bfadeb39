"""
Mock 객체 저장소

테스트용 인메모리 Object Store.
IObjectStore Protocol 준수.
"""

import asyncio
from dataclasses import dataclass

from adapters.interfaces import ObjectNotFound


@dataclass
class StoredObject:
    """저장된 객체"""

    body: bytes
    content_type: str


class MockObjectStore:
    """Mock 객체 저장소

    IObjectStore Protocol 구현.
    저장 내용과 put 호출 횟수를 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    store = MockObjectStore()
    await store.put("k", b"v", "text/plain")
    assert store.objects["k"].body == b"v"

    # 장애 시나리오
    store = MockObjectStore(should_fail=True)
    ```
    """

    def __init__(self, should_fail: bool = False, delay: float = 0.0):
        """
        Args:
            should_fail: True면 모든 put/get이 ConnectionError
            delay: put 지연 시간 (초, 비동기 디스패치 검증용)
        """
        self.should_fail = should_fail
        self.delay = delay
        self.objects: dict[str, StoredObject] = {}
        self.put_count = 0

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        """객체 저장"""
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.should_fail:
            raise ConnectionError("object store unreachable")

        self.put_count += 1
        self.objects[key] = StoredObject(body=body, content_type=content_type)

    async def get(self, key: str) -> bytes:
        """객체 조회"""
        if self.should_fail:
            raise ConnectionError("object store unreachable")

        stored = self.objects.get(key)
        if stored is None:
            raise ObjectNotFound(key)
        return stored.body

    def text(self, key: str) -> str:
        """저장된 내용을 문자열로 반환 (테스트 헬퍼)"""
        return self.objects[key].body.decode("utf-8")
