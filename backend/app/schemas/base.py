"""
base类
backend/app/schemas/base.py
"""
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from app.utils.field_mapper import default_mapper


def to_camel(field_name: str) -> str:
    return default_mapper.to_camel_case(field_name)


class BaseSchema(BaseModel):
    # 入参同时接受camelCase和snake_case，出参统一camelCase
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @classmethod
    def serialize(cls, obj: Any) -> Dict[str, Any]:
        """ORM对象 → 前端JSON字典"""
        return cls.model_validate(obj).model_dump(by_alias=True, mode="json")


class TimestampSchema(BaseSchema):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IDSchema(BaseSchema):
    id: uuid.UUID
