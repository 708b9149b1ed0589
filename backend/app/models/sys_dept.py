"""
部门管理模型（邻接表：parent_id 指向上级部门）
backend/app/models/sys_dept.py
"""
from sqlalchemy import Column, ForeignKey, Index, SmallInteger, String, Uuid, text

from app.models.base import Base, SoftDeleteMixin, TimestampMixin, uuid_pk_column


class SysDept(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'sys_dept'
    # 部门编号只在未删除的部门中唯一
    __table_args__ = (
        Index('uq_sys_dept_code_live', 'code', unique=True,
              postgresql_where=text('is_deleted = 0'), sqlite_where=text('is_deleted = 0')),
        {'comment': '部门管理表'},
    )

    id = uuid_pk_column()
    name = Column(String(100), nullable=False, comment='部门名称')
    code = Column(String(100), nullable=True, comment='部门编号')
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('sys_dept.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
        comment='父节点id（NULL表示顶级部门）'
    )
    leader = Column(String(50), nullable=True, comment='负责人')
    phone = Column(String(20), nullable=True, comment='联系电话')
    email = Column(String(100), nullable=True, comment='邮箱')
    sort = Column(SmallInteger, nullable=False, default=0, comment='显示顺序')
    status = Column(SmallInteger, nullable=False, default=1, comment='状态(1-正常 0-禁用)')

    def __repr__(self):
        return f"<SysDept(id={self.id}, name={self.name}, code={self.code})>"
