"""
S3 어댑터

지출 내보내기 파일 저장소.
IObjectStore Protocol 준수.
"""

from adapters.s3.object_store import S3ObjectStore

__all__ = [
    "S3ObjectStore",
]
