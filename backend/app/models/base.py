"""
SQLAlchemy Declarative Base
backend/app/models/base.py
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, SmallInteger, Uuid
from sqlalchemy.orm import declarative_base

# 创建DeclarativeBase实例
Base = declarative_base()


def uuid_pk_column():
    """生成UUID主键列的辅助函数（通用Uuid类型，PostgreSQL下映射为原生UUID）"""
    return Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False
    )


def now() -> datetime:
    """应用侧时间戳（微秒精度，保证同一秒内创建的记录排序稳定）"""
    return datetime.now()


class TimestampMixin:
    """created_at 创建时写入一次，updated_at 每次变更时刷新"""
    created_at = Column(DateTime, nullable=False, default=now, index=True, comment='创建时间')
    updated_at = Column(DateTime, nullable=False, default=now, onupdate=now, comment='更新时间')


class SoftDeleteMixin:
    """逻辑删除标识"""
    is_deleted = Column(SmallInteger, nullable=False, default=0, comment='逻辑删除标识(0-未删除 1-已删除)')


__all__ = ['Base', 'uuid_pk_column', 'TimestampMixin', 'SoftDeleteMixin', 'now']
