"""
多语言模块服务层
backend/app/services/i18n_module_service.py
"""
from typing import List

from app.models import I18nModule
from app.repositories.i18n_module_repository import I18nModuleRepository
from app.services.base_service import CrudService


class I18nModuleService(CrudService[I18nModule]):
    """模块代码唯一且创建后不可修改，删除为物理删除（连带词条）"""

    resource_name = "模块"
    unique_fields = {"code": "模块代码已存在"}
    immutable_fields = frozenset({"code"})

    def __init__(self, i18n_module_repository: I18nModuleRepository):
        super().__init__(i18n_module_repository)
        self.i18n_module_repository = i18n_module_repository

    async def list_all(self) -> List[I18nModule]:
        """全部模块（下拉选项用，按代码排序）"""
        return await self.i18n_module_repository.list_all(I18nModule.code)
