"""HTTP framework adapters."""

from applog.adapters.fastapi import ACCESS_LOG_FORMAT, build_access_format, for_fastapi

__all__ = ["ACCESS_LOG_FORMAT", "build_access_format", "for_fastapi"]
