"""
多语言词条模型（宽表：每种语言一列）
backend/app/models/i18n.py
"""
from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, uuid_pk_column

# 语言标识 → 列名
LOCALE_COLUMNS = {
    'zh-CN': 'zh_cn',
    'en-US': 'en_us',
    'ar-SA': 'ar_sa',
}


class I18nEntry(TimestampMixin, Base):
    __tablename__ = 'i18n'
    __table_args__ = (
        UniqueConstraint('module_id', 'key', name='uq_i18n_module_key'),
        {'comment': '多语言词条表'},
    )

    id = uuid_pk_column()
    module_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('i18n_modules.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
        comment='所属模块ID'
    )
    key = Column(String(100), nullable=False, comment='键名')
    zh_cn = Column(Text, nullable=True, comment='中文')
    en_us = Column(Text, nullable=True, comment='英文')
    ar_sa = Column(Text, nullable=True, comment='阿拉伯文')
    remark = Column(String(255), nullable=True, comment='备注')

    module = relationship('I18nModule', lazy='selectin')

    @property
    def module_code(self):
        return self.module.code if self.module else None

    def __repr__(self):
        return f"<I18nEntry(id={self.id}, module_id={self.module_id}, key={self.key})>"
