"""
多语言翻译表结构调整脚本测试
"""
import pytest
from sqlalchemy import inspect, text

from app.core.exceptions import MigrationError
from app.scripts.restructure_i18n_translations import (
    BACKUP_TABLE_NAME, TABLE_NAME, TranslationTableRestructurer, main, merge_translations
)

CREATE_OLD_TABLE = f"""
    CREATE TABLE {TABLE_NAME} (
        id VARCHAR(36) PRIMARY KEY,
        language VARCHAR(10) NOT NULL,
        module VARCHAR(50) NOT NULL,
        "key" VARCHAR(200) NOT NULL,
        value TEXT NOT NULL,
        remark VARCHAR(500) NULL,
        "createdAt" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        "updatedAt" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
"""

OLD_ROWS = [
    {"id": "1", "language": "zh-CN", "module": "common", "key": "save", "value": "保存", "remark": None},
    {"id": "2", "language": "en-US", "module": "common", "key": "save", "value": "Save", "remark": "按钮"},
    {"id": "3", "language": "ar-SA", "module": "common", "key": "save", "value": "حفظ", "remark": ""},
    {"id": "4", "language": "zh-CN", "module": "menu", "key": "home", "value": "首页", "remark": None},
    {"id": "5", "language": "fr-FR", "module": "menu", "key": "about", "value": "À propos", "remark": None},
]


async def _create_old_table(engine, rows=OLD_ROWS):
    async with engine.begin() as conn:
        await conn.execute(text(CREATE_OLD_TABLE))
        await conn.execute(
            text(f'INSERT INTO {TABLE_NAME} (id, language, module, "key", value, remark) '
                 f'VALUES (:id, :language, :module, :key, :value, :remark)'),
            rows,
        )


async def _table_info(engine):
    def _inspect(sync_conn):
        inspector = inspect(sync_conn)
        tables = set(inspector.get_table_names())
        columns = {column["name"] for column in inspector.get_columns(TABLE_NAME)} if TABLE_NAME in tables else set()
        return tables, columns

    async with engine.connect() as conn:
        return await conn.run_sync(_inspect)


async def _fetch_new_rows(engine):
    async with engine.connect() as conn:
        result = await conn.execute(text(
            f'SELECT module, "key", "zhCN", "enUS", "arSA", remark FROM {TABLE_NAME} ORDER BY module, "key"'
        ))
        return [dict(row) for row in result.mappings().all()]


class TestMergeTranslations:

    def test_all_locales_merged_into_one_row(self):
        merged = merge_translations([
            {"language": "en-US", "module": "common", "key": "save", "value": "Save", "remark": None},
            {"language": "zh-CN", "module": "common", "key": "save", "value": "保存", "remark": None},
            {"language": "ar-SA", "module": "common", "key": "save", "value": "حفظ", "remark": None},
        ])

        assert merged == [{
            "module": "common", "key": "save",
            "zhCN": "保存", "enUS": "Save", "arSA": "حفظ", "remark": None,
        }]

    def test_missing_locales_are_empty_strings(self):
        merged = merge_translations([
            {"language": "zh-CN", "module": "menu", "key": "home", "value": "首页", "remark": None},
        ])

        assert merged[0]["enUS"] == ""
        assert merged[0]["arSA"] == ""

    def test_first_non_empty_remark_wins(self):
        merged = merge_translations([
            {"language": "ar-SA", "module": "common", "key": "save", "value": "حفظ", "remark": ""},
            {"language": "en-US", "module": "common", "key": "save", "value": "Save", "remark": "按钮"},
            {"language": "zh-CN", "module": "common", "key": "save", "value": "保存", "remark": "中文备注"},
        ])

        assert merged[0]["remark"] == "按钮"

    def test_unknown_language_keeps_group(self):
        merged = merge_translations([
            {"language": "fr-FR", "module": "menu", "key": "about", "value": "À propos", "remark": None},
        ])

        assert merged == [{
            "module": "menu", "key": "about", "zhCN": "", "enUS": "", "arSA": "", "remark": None,
        }]

    def test_groups_by_module_and_key(self):
        merged = merge_translations([
            {"language": "zh-CN", "module": "common", "key": "title", "value": "标题", "remark": None},
            {"language": "zh-CN", "module": "menu", "key": "title", "value": "菜单", "remark": None},
        ])

        assert [(row["module"], row["zhCN"]) for row in merged] == [("common", "标题"), ("menu", "菜单")]

    def test_colon_in_module_or_key_does_not_collide(self):
        merged = merge_translations([
            {"language": "zh-CN", "module": "a:b", "key": "c", "value": "X", "remark": None},
            {"language": "zh-CN", "module": "a", "key": "b:c", "value": "Y", "remark": None},
        ])

        assert len(merged) == 2
        assert {(row["module"], row["key"], row["zhCN"]) for row in merged} == {
            ("a:b", "c", "X"), ("a", "b:c", "Y"),
        }

    def test_empty_input(self):
        assert merge_translations([]) == []


class TestRestructurer:

    @pytest.mark.asyncio
    async def test_full_run(self, bare_engine):
        await _create_old_table(bare_engine)

        summary = await TranslationTableRestructurer(bare_engine).run()

        assert summary.old_count == 5
        assert summary.new_count == 3
        assert summary.dry_run is False

        tables, columns = await _table_info(bare_engine)
        assert BACKUP_TABLE_NAME in tables
        assert "language" not in columns
        assert {"zhCN", "enUS", "arSA"} <= columns

        assert await _fetch_new_rows(bare_engine) == [
            {"module": "common", "key": "save", "zhCN": "保存", "enUS": "Save", "arSA": "حفظ", "remark": "按钮"},
            {"module": "menu", "key": "about", "zhCN": "", "enUS": "", "arSA": "", "remark": None},
            {"module": "menu", "key": "home", "zhCN": "首页", "enUS": "", "arSA": "", "remark": None},
        ]

        async with bare_engine.connect() as conn:
            backup_count = (await conn.execute(text(f"SELECT COUNT(*) FROM {BACKUP_TABLE_NAME}"))).scalar()
        assert backup_count == 5

    @pytest.mark.asyncio
    async def test_dry_run_changes_nothing(self, bare_engine):
        await _create_old_table(bare_engine)

        summary = await TranslationTableRestructurer(bare_engine).run(dry_run=True)

        assert (summary.old_count, summary.new_count, summary.dry_run) == (5, 3, True)
        tables, columns = await _table_info(bare_engine)
        assert BACKUP_TABLE_NAME not in tables
        assert "language" in columns

    @pytest.mark.asyncio
    async def test_failed_write_rolls_back(self, bare_engine):
        await _create_old_table(bare_engine)

        # 主键重复，第二条写入失败
        restructurer = TranslationTableRestructurer(bare_engine, id_factory=lambda: "duplicated-id")
        with pytest.raises(MigrationError):
            await restructurer.run()

        tables, columns = await _table_info(bare_engine)
        assert "language" in columns
        assert BACKUP_TABLE_NAME not in tables
        async with bare_engine.connect() as conn:
            count = (await conn.execute(text(f"SELECT COUNT(*) FROM {TABLE_NAME}"))).scalar()
        assert count == 5

    @pytest.mark.asyncio
    async def test_missing_table(self, bare_engine):
        with pytest.raises(MigrationError):
            await TranslationTableRestructurer(bare_engine).run()

    @pytest.mark.asyncio
    async def test_already_migrated(self, bare_engine):
        await _create_old_table(bare_engine)
        await TranslationTableRestructurer(bare_engine).run()

        with pytest.raises(MigrationError):
            await TranslationTableRestructurer(bare_engine).run()


def test_main_exit_code_on_failure(tmp_path):
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}"

    assert main(["--database-url", database_url]) == 1
    assert main(["--database-url", database_url, "--dry-run"]) == 1
