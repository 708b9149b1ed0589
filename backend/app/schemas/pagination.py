"""
分页与批量操作的通用Schemas
backend/app/schemas/pagination.py
"""
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Type

from pydantic import Field

from app.core.config import settings
from app.schemas.base import BaseSchema


class PaginationQuery(BaseSchema):
    """分页查询参数"""
    page: int = Field(1, ge=1, description="页码，从1开始")
    page_size: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, description="每页数量")
    keyword: Optional[str] = Field(None, description="关键词（多字段模糊匹配）")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class BatchDeleteRequest(BaseSchema):
    """批量删除请求"""
    ids: List[uuid.UUID] = Field(..., min_length=1, description="ID列表")


@dataclass
class Page:
    """分页结果：total为分页前（已应用过滤条件）的总数"""
    items: Sequence[Any]
    total: int
    page: int
    page_size: int

    def to_response(self, schema: Type[BaseSchema]) -> Dict[str, Any]:
        """转换为 {list, pagination} 响应结构"""
        return {
            "list": [schema.serialize(item) for item in self.items],
            "pagination": {
                "page": self.page,
                "pageSize": self.page_size,
                "total": self.total,
            },
        }
