"""
系统角色模型
backend/app/models/sys_role.py
"""
from sqlalchemy import Column, ForeignKey, Index, SmallInteger, String, Table, Uuid, text
from sqlalchemy.orm import relationship

from app.models.base import Base, SoftDeleteMixin, TimestampMixin, uuid_pk_column


# 角色菜单关联表（多对多）
sys_role_menu = Table(
    'sys_role_menu',
    Base.metadata,
    Column('role_id', Uuid(as_uuid=True), ForeignKey('sys_role.id', ondelete='CASCADE'), primary_key=True, comment='角色ID'),
    Column('menu_id', Uuid(as_uuid=True), ForeignKey('sys_menu.id', ondelete='CASCADE'), primary_key=True, comment='菜单ID'),
    comment='角色菜单关联表'
)


class SysRole(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'sys_role'
    # 名称/编码只在未删除的角色中唯一（部分唯一索引）
    __table_args__ = (
        Index('uq_sys_role_name_live', 'name', unique=True,
              postgresql_where=text('is_deleted = 0'), sqlite_where=text('is_deleted = 0')),
        Index('uq_sys_role_code_live', 'code', unique=True,
              postgresql_where=text('is_deleted = 0'), sqlite_where=text('is_deleted = 0')),
        {'comment': '系统角色表'},
    )

    id = uuid_pk_column()
    name = Column(String(50), nullable=False, comment='角色名称')
    code = Column(String(50), nullable=False, comment='角色编码')
    description = Column(String(255), nullable=True, comment='角色描述')
    sort = Column(SmallInteger, nullable=False, default=0, comment='显示顺序')
    status = Column(SmallInteger, nullable=False, default=1, comment='角色状态(1-正常 0-停用)')

    menus = relationship('SysMenu', secondary=sys_role_menu, lazy='selectin')

    @property
    def menu_ids(self):
        return [menu.id for menu in self.menus]

    def __repr__(self):
        return f"<SysRole(id={self.id}, name={self.name}, code={self.code})>"
