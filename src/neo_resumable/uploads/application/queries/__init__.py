"""Resumable upload queries."""

from .get_upload_status import GetUploadStatusQuery, GetUploadStatusData, create_get_upload_status_query

__all__ = [
    "GetUploadStatusQuery",
    "GetUploadStatusData",
    "create_get_upload_status_query",
]
