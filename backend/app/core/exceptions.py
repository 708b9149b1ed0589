"""
核心异常处理配置文件
backend/app/core/exceptions.py
"""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """基础异常类"""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(AppException):
    """资源不存在异常（404）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(AppException):
    """唯一字段冲突（409），创建或重命名时触发"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationError(AppException):
    """入参校验失败（422），在访问存储之前抛出"""
    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)


class BadRequest(AppException):
    """业务规则拒绝（400）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class MigrationError(Exception):
    """离线迁移脚本的致命错误，仅面向运维人员"""
