"""
多语言翻译表结构调整（一次性离线迁移）
backend/app/scripts/restructure_i18n_translations.py

旧结构：i18n_translations(id, language, module, key, value, remark, createdAt, updatedAt)
        每个 (module, key) 每种语言一行
新结构：i18n_translations(id, module, key, zhCN, enUS, arSA, remark, createdAt, updatedAt)
        每个 (module, key) 一行，UNIQUE(module, key)

执行方式：
    python -m app.scripts.restructure_i18n_translations [--dry-run] [--database-url URL]

注意：执行期间不能有其他进程写入翻译表。
"""
import argparse
import asyncio
import logging
import sys
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.core.config import settings
from app.core.exceptions import MigrationError

logger = logging.getLogger(__name__)

TABLE_NAME = "i18n_translations"
BACKUP_TABLE_NAME = "i18n_translations_backup"

# 旧表 language 取值 → 新表语言列
LANGUAGE_COLUMNS: Dict[str, str] = {
    "zh-CN": "zhCN",
    "en-US": "enUS",
    "ar-SA": "arSA",
}

SELECT_OLD_ROWS = text(f'SELECT * FROM {TABLE_NAME} ORDER BY module, "key", language')
CREATE_BACKUP = text(f"CREATE TABLE {BACKUP_TABLE_NAME} AS SELECT * FROM {TABLE_NAME}")
DROP_OLD_TABLE = text(f"DROP TABLE {TABLE_NAME}")
CREATE_NEW_TABLE = text(f"""
    CREATE TABLE {TABLE_NAME} (
        id VARCHAR(36) PRIMARY KEY,
        module VARCHAR(50) NOT NULL,
        "key" VARCHAR(200) NOT NULL,
        "zhCN" TEXT NOT NULL,
        "enUS" TEXT NOT NULL,
        "arSA" TEXT NOT NULL,
        remark VARCHAR(500) NULL,
        "createdAt" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        "updatedAt" TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT uq_i18n_translations_module_key UNIQUE (module, "key")
    )
""")
CREATE_MODULE_INDEX = text(f"CREATE INDEX idx_i18n_translations_module ON {TABLE_NAME} (module)")
INSERT_NEW_ROW = text(f"""
    INSERT INTO {TABLE_NAME} (id, module, "key", "zhCN", "enUS", "arSA", remark)
    VALUES (:id, :module, :key, :zhCN, :enUS, :arSA, :remark)
""")


@dataclass
class MigrationSummary:
    old_count: int
    new_count: int
    dry_run: bool = False


def merge_translations(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    按 (module, key) 合并旧表行

    - 每组输出 {module, key, zhCN, enUS, arSA, remark}，未出现的语言为空字符串
    - 无法识别的 language 忽略（分组记录仍会生成）
    - remark 取组内第一个非空值（按读取顺序，即 language 字母序）
    """
    merged: Dict[Tuple[str, str], Dict[str, Any]] = {}
    for row in rows:
        group_key = (row["module"], row["key"])
        record = merged.get(group_key)
        if record is None:
            record = {
                "module": row["module"],
                "key": row["key"],
                "zhCN": "",
                "enUS": "",
                "arSA": "",
                "remark": None,
            }
            merged[group_key] = record

        if not record["remark"] and row.get("remark"):
            record["remark"] = row["remark"]

        column = LANGUAGE_COLUMNS.get(row.get("language"))
        if column is None:
            logger.warning(f"忽略无法识别的语言：{row.get('language')}（{row['module']}.{row['key']}）")
            continue
        record[column] = row.get("value") or ""
    return list(merged.values())


class TranslationTableRestructurer:
    """
    翻译表迁移执行器

    读取阶段失败时不做任何破坏性操作；
    备份、删除旧表、建新表、写入数据在同一事务内，任一步失败整体回滚并抛 MigrationError。
    """

    def __init__(self, engine: AsyncEngine, id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        self.engine = engine
        self.id_factory = id_factory

    async def _check_source(self) -> None:
        def _inspect(sync_conn) -> Dict[str, Any]:
            inspector = inspect(sync_conn)
            tables = set(inspector.get_table_names())
            columns = set()
            if TABLE_NAME in tables:
                columns = {column["name"] for column in inspector.get_columns(TABLE_NAME)}
            return {"tables": tables, "columns": columns}

        async with self.engine.connect() as conn:
            info = await conn.run_sync(_inspect)

        if TABLE_NAME not in info["tables"]:
            raise MigrationError(f"表 {TABLE_NAME} 不存在")
        if "language" not in info["columns"]:
            raise MigrationError(f"表 {TABLE_NAME} 已是新结构，无需迁移")
        if BACKUP_TABLE_NAME in info["tables"]:
            raise MigrationError(f"备份表 {BACKUP_TABLE_NAME} 已存在，请确认后手动处理")

    async def read_old_rows(self) -> List[Dict[str, Any]]:
        async with self.engine.connect() as conn:
            result = await conn.execute(SELECT_OLD_ROWS)
            return [dict(row) for row in result.mappings().all()]

    async def run(self, dry_run: bool = False) -> MigrationSummary:
        logger.info("开始调整多语言翻译表结构")

        # 1. 读取旧数据（失败直接终止，不做破坏性操作）
        try:
            await self._check_source()
            old_rows = await self.read_old_rows()
        except SQLAlchemyError as e:
            raise MigrationError(f"读取旧翻译数据失败：{e}") from e
        logger.info(f"读取到 {len(old_rows)} 条翻译记录")

        # 2. 按 module + key 合并
        new_rows = merge_translations(old_rows)
        logger.info(f"合并为 {len(new_rows)} 条记录")

        if dry_run:
            logger.info("dry-run 模式，不修改数据库")
            return MigrationSummary(old_count=len(old_rows), new_count=len(new_rows), dry_run=True)

        # 3. 事务内：备份 → 删除旧表 → 建新表 → 写入
        try:
            async with self.engine.begin() as conn:
                logger.info(f"备份旧表到 {BACKUP_TABLE_NAME}")
                await conn.execute(CREATE_BACKUP)
                logger.info("删除旧表")
                await conn.execute(DROP_OLD_TABLE)
                logger.info("创建新表结构")
                await conn.execute(CREATE_NEW_TABLE)
                await conn.execute(CREATE_MODULE_INDEX)
                logger.info("写入合并后的数据")
                if new_rows:
                    await conn.execute(INSERT_NEW_ROW, [{"id": self.id_factory(), **row} for row in new_rows])
        except SQLAlchemyError as e:
            logger.error(f"迁移失败，已回滚：{e}")
            raise MigrationError(f"迁移失败，已回滚：{e}") from e

        logger.info(f"迁移完成：{len(old_rows)} 条记录 -> {len(new_rows)} 条记录")
        return MigrationSummary(old_count=len(old_rows), new_count=len(new_rows))


async def restructure(database_url: Optional[str] = None, dry_run: bool = False) -> MigrationSummary:
    engine = create_async_engine(database_url or settings.SQLALCHEMY_DATABASE_URI)
    try:
        return await TranslationTableRestructurer(engine).run(dry_run=dry_run)
    finally:
        await engine.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="调整多语言翻译表结构（按语言分行 → 按键分列）")
    parser.add_argument("--dry-run", action="store_true", help="只读取并合并，不修改数据库")
    parser.add_argument("--database-url", default=None, help="数据库连接串，默认使用配置中的数据库")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    try:
        summary = asyncio.run(restructure(args.database_url, dry_run=args.dry_run))
    except MigrationError as e:
        logger.error(f"迁移终止：{e}")
        return 1
    logger.info(f"汇总：{summary.old_count} -> {summary.new_count}（dry_run={summary.dry_run}）")
    return 0


if __name__ == "__main__":
    sys.exit(main())
