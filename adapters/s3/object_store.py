"""
S3 객체 저장소

boto3 S3 클라이언트로 지출 내보내기 파일 저장/조회.
IObjectStore Protocol 준수.

boto3 호출은 블로킹이므로 asyncio.to_thread로 이벤트 루프 밖에서 실행.
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from adapters.interfaces import ObjectNotFound

logger = logging.getLogger(__name__)


# get_object가 "없음"으로 응답하는 에러 코드
NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3ObjectStore:
    """S3 객체 저장소

    IObjectStore Protocol 구현.

    Args:
        bucket: 버킷 이름
        region: AWS 리전
        access_key_id: 액세스 키 (None이면 boto3 기본 자격 증명 체인)
        secret_access_key: 시크릿 키
        client: 주입할 boto3 클라이언트 (테스트용)

    사용 예시:
    ```python
    store = S3ObjectStore(bucket="my-bucket", region="ap-south-1")
    await store.put("expenses-a@x.com.txt", b"...", "text/plain")
    body = await store.get("expenses-a@x.com.txt")
    ```
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any = None,
    ):
        if not bucket:
            raise ValueError("bucket은 필수입니다")

        self.bucket = bucket
        self.region = region
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        """객체 저장 (전체 덮어쓰기)

        Raises:
            ClientError | BotoCoreError: S3 오류 (호출자가 처리)
        """
        await asyncio.to_thread(
            self._client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )
        logger.debug(f"S3 업로드 완료: {key}", extra={"bytes": len(body)})

    async def get(self, key: str) -> bytes:
        """객체 조회

        Raises:
            ObjectNotFound: 키가 없는 경우
        """
        try:
            response = await asyncio.to_thread(
                self._client.get_object,
                Bucket=self.bucket,
                Key=key,
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in NOT_FOUND_CODES:
                raise ObjectNotFound(key) from e
            logger.error(f"S3 조회 실패: {key} ({code})")
            raise
        except BotoCoreError as e:
            logger.error(f"S3 연결 실패: {e}")
            raise

        return await asyncio.to_thread(response["Body"].read)
