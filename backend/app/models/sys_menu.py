"""
系统菜单模型
backend/app/models/sys_menu.py
"""
from sqlalchemy import Column, ForeignKey, SmallInteger, String, Uuid

from app.models.base import Base, SoftDeleteMixin, TimestampMixin, uuid_pk_column


class SysMenu(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'sys_menu'
    __table_args__ = {'comment': '系统菜单表'}

    id = uuid_pk_column()
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('sys_menu.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
        comment='父菜单ID（NULL表示顶级菜单）'
    )
    name = Column(String(50), nullable=False, comment='菜单名称')
    name_i18n = Column(String(100), nullable=True, comment='菜单名称多语言键（module.key）')
    path = Column(String(200), nullable=True, comment='路由路径')
    component = Column(String(200), nullable=True, comment='组件路径')
    redirect = Column(String(200), nullable=True, comment='跳转路径')
    icon = Column(String(50), nullable=True, comment='菜单图标（取值见图标注册表）')
    type = Column(SmallInteger, nullable=False, default=2, comment='菜单类型（1-目录 2-菜单 3-按钮）')
    permission = Column(String(100), nullable=True, comment='权限标识')
    sort = Column(SmallInteger, nullable=False, default=0, comment='排序')
    visible = Column(SmallInteger, nullable=False, default=1, comment='显示状态（1-显示 0-隐藏）')
    status = Column(SmallInteger, nullable=False, default=1, comment='状态（1-正常 0-禁用）')
    is_external = Column(SmallInteger, nullable=False, default=0, comment='是否外链（1-是 0-否）')
    is_cache = Column(SmallInteger, nullable=False, default=0, comment='是否缓存页面（1-是 0-否）')

    def __repr__(self):
        return f"<SysMenu(id={self.id}, name={self.name}, type={self.type})>"
