"""
请求上下文
backend/app/utils/request_context.py
"""
from contextvars import ContextVar
from typing import Optional

import logging

# 请求ID上下文变量（中间件写入，日志过滤器读取）
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIDFilter(logging.Filter):
    """注入request_id到日志记录，无则显示unknown"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_ctx.get() or "unknown"
        return True
