"""
统一API响应模型
backend/app/schemas/responses.py
"""
from typing import TypeVar, Generic, Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """API统一响应格式"""
    code: str = Field(default="00000", description="响应代码")
    data: Optional[T] = Field(default=None, description="响应数据")
    msg: str = Field(default="操作成功", description="响应消息")
    timestamp: datetime = Field(default_factory=datetime.now, description="响应时间戳")

    @classmethod
    def success(cls, data: T = None, msg: str = "操作成功") -> 'ApiResponse[T]':
        """成功响应快捷方法"""
        return cls(code=ResponseCode.SUCCESS, data=data, msg=msg)


class ErrorResponse(BaseModel):
    """错误响应模型"""
    code: str = Field(..., description="错误代码")
    msg: str = Field(..., description="错误消息")
    details: Optional[Any] = Field(None, description="错误详情")
    request_id: Optional[str] = Field(None, description="请求ID")
    timestamp: datetime = Field(default_factory=datetime.now)


# 常用响应代码
class ResponseCode:
    SUCCESS = "00000"
    VALIDATION_ERROR = "10001"
    BAD_REQUEST = "10002"
    NOT_FOUND = "30001"
    CONFLICT = "30009"
    INTERNAL_ERROR = "50000"

    @classmethod
    def from_status(cls, status_code: int) -> str:
        """HTTP状态码 → 业务错误码"""
        return {
            400: cls.BAD_REQUEST,
            404: cls.NOT_FOUND,
            409: cls.CONFLICT,
            422: cls.VALIDATION_ERROR,
        }.get(status_code, cls.INTERNAL_ERROR)
