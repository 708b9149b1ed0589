"""
多语言词条服务层
backend/app/services/i18n_service.py
核心功能：
1. 词条CRUD：所属模块必须存在，键名在模块内唯一，所属模块创建后不可修改
2. 全量翻译导出：{"zh-CN": {"module.key": value}, "en-US": {...}, "ar-SA": {...}}
3. 批量导入：缺失模块自动创建，已存在词条按 overwrite 决定更新或跳过，单条失败只记录不中断
"""
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models import I18nEntry, I18nModule, LOCALE_COLUMNS
from app.repositories.i18n_module_repository import I18nModuleRepository
from app.repositories.i18n_repository import I18nRepository
from app.services.base_service import CrudService
from app.utils.json_parser import flatten_json, unflatten_json, validate_json

logger = logging.getLogger(__name__)

DEFAULT_MODULE_CODE = "common"
KEY_MAX_LENGTH = 100
MODULE_CODE_MAX_LENGTH = 50


class I18nService(CrudService[I18nEntry]):
    resource_name = "多语言数据"
    default_page_size = settings.TRANSLATION_PAGE_SIZE
    immutable_fields = frozenset({"module_id"})

    def __init__(self, i18n_repository: I18nRepository, i18n_module_repository: I18nModuleRepository):
        super().__init__(i18n_repository)
        self.i18n_repository = i18n_repository
        self.i18n_module_repository = i18n_module_repository

    # ------------------------------
    # 唯一性：(module_id, key) 组合唯一
    # ------------------------------
    @property
    def conflict_message(self) -> str:
        return "该模块下键名已存在"

    async def _check_unique(self, data: Dict[str, Any], current: Optional[I18nEntry] = None) -> None:
        key = data.get("key")
        if key is None:
            return
        module_id = current.module_id if current is not None else data.get("module_id")
        if current is not None and current.key == key:
            return
        existing = await self.i18n_repository.get_by_module_and_key(
            module_id, key, exclude_id=current.id if current is not None else None
        )
        if existing is not None:
            logger.warning(f"词条键名冲突：module_id={module_id} key={key}")
            raise ConflictError(detail=self.conflict_message)

    async def create(self, data: Dict[str, Any]) -> I18nEntry:
        # 先校验模块存在，再校验键名唯一
        module = await self.i18n_module_repository.get_by_id(data.get("module_id"))
        if module is None:
            raise NotFoundError(detail="模块不存在")
        return await super().create(data)

    # ------------------------------
    # 导出
    # ------------------------------
    async def get_all_translations(self) -> Dict[str, Dict[str, Optional[str]]]:
        """按语言分组的扁平翻译表，键为 "模块代码.键名"，缺失模块时使用 common"""
        translations: Dict[str, Dict[str, Optional[str]]] = {locale: {} for locale in LOCALE_COLUMNS}
        for entry, module_code in await self.i18n_repository.list_with_module_codes():
            full_key = f"{module_code or DEFAULT_MODULE_CODE}.{entry.key}"
            for locale, column in LOCALE_COLUMNS.items():
                translations[locale][full_key] = getattr(entry, column)
        return translations

    async def export_nested(self, locale: str) -> Dict[str, Any]:
        """导出单个语言的嵌套JSON（i18next 兼容）"""
        column = LOCALE_COLUMNS.get(locale)
        if column is None:
            raise ValidationError(detail=f"不支持的语言：{locale}")
        rows = await self.i18n_repository.list_with_module_codes()
        return unflatten_json(
            (module_code or DEFAULT_MODULE_CODE, entry.key, getattr(entry, column) or "")
            for entry, module_code in rows
        )

    # ------------------------------
    # 导入
    # ------------------------------
    @staticmethod
    def _validate_item(item: Dict[str, Any]) -> Optional[str]:
        module_code = item.get("module")
        key = item.get("key")
        if not module_code or not key:
            return "模块代码和键名不能为空"
        if len(module_code) > MODULE_CODE_MAX_LENGTH:
            return f"模块代码长度不能超过{MODULE_CODE_MAX_LENGTH}个字符"
        if len(key) > KEY_MAX_LENGTH:
            return f"键名长度不能超过{KEY_MAX_LENGTH}个字符"
        return None

    async def import_data(
            self,
            items: Sequence[Dict[str, Any]],
            modules: Optional[Sequence[Dict[str, Any]]] = None,
            overwrite: bool = False,
    ) -> Dict[str, Any]:
        """
        批量导入词条

        :param items: [{module, key, zh_cn, en_us, ar_sa}]
        :param modules: 需要预先创建/更新的模块 [{code, name, description}]
        :param overwrite: 已存在的词条是否覆盖
        :return: {created, updated, skipped, errors: [{module, key, error}]}
        """
        result: Dict[str, Any] = {"created": 0, "updated": 0, "skipped": 0, "errors": []}

        async with self._write() as session:
            module_map: Dict[str, I18nModule] = {}

            for module_data in modules or []:
                code = module_data.get("code")
                if not code:
                    continue
                module = await self.i18n_module_repository.get_by_code(code, session=session)
                if module is None:
                    module = await self.i18n_module_repository.create({
                        "code": code,
                        "name": module_data.get("name") or code.capitalize(),
                        "description": module_data.get("description"),
                    }, session)
                else:
                    module.name = module_data.get("name") or module.name
                    if module_data.get("description") is not None:
                        module.description = module_data["description"]
                module_map[code] = module

            entry_map = await self.i18n_repository.map_by_module_and_key(session)

            for item in items:
                error = self._validate_item(item)
                if error:
                    result["errors"].append({"module": item.get("module"), "key": item.get("key"), "error": error})
                    continue

                module_code, key = item["module"], item["key"]
                values = {column: item.get(column) for column in LOCALE_COLUMNS.values()}
                if item.get("remark") is not None:
                    values["remark"] = item["remark"]

                # 每条词条一个保存点，写入失败只回滚该条
                try:
                    async with session.begin_nested():
                        module = module_map.get(module_code)
                        if module is None:
                            module = await self._get_or_create_module(module_code, session)
                        existing = entry_map.get((module.id, key))
                        if existing is None:
                            existing = await self.i18n_repository.create(
                                {"module_id": module.id, "key": key, **values}, session
                            )
                            outcome = "created"
                        elif overwrite:
                            for column, value in values.items():
                                setattr(existing, column, value)
                            outcome = "updated"
                        else:
                            outcome = "skipped"
                except SQLAlchemyError as e:
                    logger.warning(f"导入词条写入失败：{module_code}.{key}：{e}")
                    result["errors"].append({"module": module_code, "key": key, "error": f"写入失败：{e.__class__.__name__}"})
                    continue

                module_map[module_code] = module
                entry_map[(module.id, key)] = existing
                result[outcome] += 1

        logger.info(
            f"多语言导入完成：新增{result['created']}，更新{result['updated']}，"
            f"跳过{result['skipped']}，失败{len(result['errors'])}"
        )
        return result

    async def _get_or_create_module(self, code: str, session: AsyncSession) -> I18nModule:
        module = await self.i18n_module_repository.get_by_code(code, session=session)
        if module is None:
            module = await self.i18n_module_repository.create({
                "code": code,
                "name": code.capitalize(),
                "description": f"{code} 模块",
            }, session)
            logger.info(f"导入时自动创建模块：{code}")
        return module

    async def import_nested(self, data: Dict[str, Any], overwrite: bool = False) -> Dict[str, Any]:
        """
        按语言分组的嵌套JSON导入：{"zh-CN": {...}, "en-US": {...}, "ar-SA": {...}}
        """
        merged: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for locale, tree in data.items():
            column = LOCALE_COLUMNS.get(locale)
            if column is None:
                raise ValidationError(detail=f"不支持的语言：{locale}")
            if not validate_json(tree):
                raise ValidationError(detail=f"{locale} 的翻译数据格式不正确：叶子节点必须为字符串或数字")
            for record in flatten_json(tree):
                item = merged.setdefault(
                    (record["module"], record["key"]),
                    {"module": record["module"], "key": record["key"]},
                )
                item[column] = record["value"]
        return await self.import_data(list(merged.values()), overwrite=overwrite)
