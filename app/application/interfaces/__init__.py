"""Application interfaces (protocols implemented by infrastructure)."""

from app.application.interfaces.record_store import IRecordStore

__all__ = ["IRecordStore"]
