"""
지출 내보내기 모듈

원장 → 텍스트 리포트 → Object Store (best-effort, 비동기)
"""

from core.export.dispatcher import ExportDispatcher
from core.export.projector import ExportProjector, export_key, render_report

__all__ = [
    "ExportDispatcher",
    "ExportProjector",
    "export_key",
    "render_report",
]
