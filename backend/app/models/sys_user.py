"""
系统用户模型
backend/app/models/sys_user.py
"""
from sqlalchemy import Column, DateTime, ForeignKey, SmallInteger, String, Table, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, uuid_pk_column


# 用户角色关联表（多对多）
sys_user_role = Table(
    'sys_user_role',
    Base.metadata,
    Column('user_id', Uuid(as_uuid=True), ForeignKey('sys_user.id', ondelete='CASCADE'), primary_key=True, comment='用户ID'),
    Column('role_id', Uuid(as_uuid=True), ForeignKey('sys_role.id', ondelete='CASCADE'), primary_key=True, comment='角色ID'),
    comment='用户角色关联表'
)


class SysUser(TimestampMixin, Base):
    __tablename__ = 'sys_user'
    __table_args__ = {'comment': '系统用户表'}

    id = uuid_pk_column()
    username = Column(String(50), nullable=False, unique=True, index=True, comment='用户名')
    password = Column(String(100), nullable=False, comment='密码（bcrypt哈希）')
    nickname = Column(String(50), nullable=True, comment='昵称')
    email = Column(String(100), nullable=True, unique=True, comment='用户邮箱')
    phone = Column(String(20), nullable=True, comment='联系方式')
    avatar = Column(String(255), nullable=True, comment='用户头像')
    gender = Column(SmallInteger, nullable=False, default=0, comment='性别(1-男 2-女 0-保密)')
    status = Column(SmallInteger, nullable=False, default=1, comment='状态(1-正常 0-禁用)')
    dept_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('sys_dept.id', ondelete='SET NULL'),
        nullable=True,
        comment='部门ID'
    )
    last_login_at = Column(DateTime, nullable=True, comment='最后登录时间')

    roles = relationship('SysRole', secondary=sys_user_role, lazy='selectin')

    def has_role(self, role_code: str) -> bool:
        return any(role.code == role_code for role in self.roles)

    def __repr__(self):
        return f"<SysUser(id={self.id}, username={self.username}, nickname={self.nickname})>"
