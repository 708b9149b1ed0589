"""
多语言模块模型
backend/app/models/i18n_module.py
"""
from sqlalchemy import Column, String

from app.models.base import Base, TimestampMixin, uuid_pk_column


class I18nModule(TimestampMixin, Base):
    __tablename__ = 'i18n_modules'
    __table_args__ = {'comment': '多语言模块表'}

    id = uuid_pk_column()
    code = Column(String(50), nullable=False, unique=True, comment='模块代码（创建后不可修改）')
    name = Column(String(100), nullable=False, comment='模块名称')
    description = Column(String(255), nullable=True, comment='模块描述')
    remark = Column(String(255), nullable=True, comment='备注')

    def __repr__(self):
        return f"<I18nModule(id={self.id}, code={self.code}, name={self.name})>"
