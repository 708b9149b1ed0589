"""
角色、部门、菜单服务测试
"""
import asyncio
import uuid

import pytest

from app.core.exceptions import BadRequest, ConflictError, NotFoundError, ValidationError
from app.services.sys_menu_service import MenuService


class TestRoleService:

    @pytest.mark.asyncio
    async def test_name_and_code_unique(self, role_service):
        await role_service.create({"name": "编辑", "code": "editor"})

        with pytest.raises(ConflictError) as exc_info:
            await role_service.create({"name": "编辑", "code": "editor2"})
        assert exc_info.value.detail == "角色名称已存在"

        with pytest.raises(ConflictError) as exc_info:
            await role_service.create({"name": "编辑2", "code": "editor"})
        assert exc_info.value.detail == "角色编码已存在"

    @pytest.mark.asyncio
    async def test_soft_delete_frees_code(self, role_service):
        role = await role_service.create({"name": "编辑", "code": "editor"})

        await role_service.delete(role.id)

        assert await role_service.get_by_id(role.id) is None
        with pytest.raises(NotFoundError):
            await role_service.delete(role.id)
        recreated = await role_service.create({"name": "编辑", "code": "editor"})
        assert recreated.id != role.id

    @pytest.mark.asyncio
    async def test_storage_constraint_on_live_code(self, role_service, monkeypatch):
        await role_service.create({"name": "编辑", "code": "editor"})

        async def _skip_check(data, current=None):
            return None

        # 绕过预检查，由部分唯一索引拦截
        monkeypatch.setattr(role_service, "_check_unique", _skip_check)
        with pytest.raises(ConflictError):
            await role_service.create({"name": "编辑2", "code": "editor"})
        with pytest.raises(ConflictError):
            await role_service.create({"name": "编辑", "code": "editor2"})

    @pytest.mark.asyncio
    async def test_delete_detaches_users(self, role_service, user_service):
        role = await role_service.create({"name": "编辑", "code": "editor"})
        user = await user_service.create({"username": "zhangsan", "password": "secret123", "role_ids": [role.id]})

        await role_service.delete(role.id)

        assert (await user_service.get_by_id(user.id)).roles == []

    @pytest.mark.asyncio
    async def test_options_only_enabled(self, role_service):
        await role_service.create({"name": "编辑", "code": "editor"})
        await role_service.create({"name": "停用", "code": "disabled", "status": 0})

        options = await role_service.list_options()

        assert [role.code for role in options] == ["editor"]

    @pytest.mark.asyncio
    async def test_assign_and_get_menus(self, role_service, menu_service):
        second = await menu_service.create({"name": "用户管理", "sort": 2})
        first = await menu_service.create({"name": "首页", "sort": 1})
        role = await role_service.create({"name": "编辑", "code": "editor"})

        await role_service.assign_menus(role.id, [second.id, first.id])

        menus = await role_service.get_role_menus(role.id)
        assert [menu.name for menu in menus] == ["首页", "用户管理"]

    @pytest.mark.asyncio
    async def test_copy_role(self, role_service, menu_service):
        menu = await menu_service.create({"name": "首页"})
        role = await role_service.create({"name": "编辑", "code": "editor", "menu_ids": [menu.id]})

        copy = await role_service.copy_role(role.id)

        assert copy.id != role.id
        assert copy.name == "编辑(副本)"
        assert copy.code.startswith("editor_copy_")
        assert copy.menu_ids == [menu.id]

        # 编码带毫秒时间戳
        await asyncio.sleep(0.002)
        named = await role_service.copy_role(role.id, name="编辑二组")
        assert named.name == "编辑二组"


class TestDeptService:

    @pytest.mark.asyncio
    async def test_tree(self, dept_service):
        root = await dept_service.create({"name": "总部", "code": "HQ"})
        rd = await dept_service.create({"name": "研发部", "code": "RD", "parent_id": root.id, "sort": 2})
        sales = await dept_service.create({"name": "销售部", "code": "SALES", "parent_id": root.id, "sort": 1})
        await dept_service.create({"name": "前端组", "code": "FE", "parent_id": rd.id})

        tree = await dept_service.get_tree()

        assert len(tree) == 1
        assert tree[0]["id"] == root.id
        assert [child["id"] for child in tree[0]["children"]] == [sales.id, rd.id]
        assert tree[0]["children"][0]["children"] == []
        assert [child["code"] for child in tree[0]["children"][1]["children"]] == ["FE"]

    @pytest.mark.asyncio
    async def test_tree_empty(self, dept_service):
        assert await dept_service.get_tree() == []

    @pytest.mark.asyncio
    async def test_code_unique(self, dept_service):
        await dept_service.create({"name": "总部", "code": "HQ"})

        with pytest.raises(ConflictError) as exc_info:
            await dept_service.create({"name": "总部2", "code": "HQ"})
        assert exc_info.value.detail == "部门编码已存在"

    @pytest.mark.asyncio
    async def test_code_storage_constraint_ignores_deleted(self, dept_service, monkeypatch):
        dept = await dept_service.create({"name": "总部", "code": "HQ"})

        async def _skip_check(data, current=None):
            return None

        monkeypatch.setattr(dept_service, "_check_unique", _skip_check)
        with pytest.raises(ConflictError):
            await dept_service.create({"name": "总部2", "code": "HQ"})

        await dept_service.delete(dept.id)
        recreated = await dept_service.create({"name": "总部", "code": "HQ"})
        assert recreated.id != dept.id

    @pytest.mark.asyncio
    async def test_parent_checks(self, dept_service):
        root = await dept_service.create({"name": "总部", "code": "HQ"})
        child = await dept_service.create({"name": "研发部", "code": "RD", "parent_id": root.id})

        with pytest.raises(NotFoundError):
            await dept_service.create({"name": "孤儿", "parent_id": uuid.uuid4()})
        with pytest.raises(BadRequest):
            await dept_service.update(root.id, {"parent_id": root.id})
        with pytest.raises(BadRequest):
            await dept_service.update(root.id, {"parent_id": child.id})

    @pytest.mark.asyncio
    async def test_delete_with_children_blocked(self, dept_service):
        root = await dept_service.create({"name": "总部", "code": "HQ"})
        child = await dept_service.create({"name": "研发部", "code": "RD", "parent_id": root.id})

        with pytest.raises(BadRequest) as exc_info:
            await dept_service.delete(root.id)
        assert exc_info.value.detail == "存在子部门，无法删除"

        await dept_service.delete(child.id)
        await dept_service.delete(root.id)
        assert await dept_service.get_tree() == []

    @pytest.mark.asyncio
    async def test_batch_delete_whole_subtree(self, dept_service):
        root = await dept_service.create({"name": "总部", "code": "HQ"})
        child = await dept_service.create({"name": "研发部", "code": "RD", "parent_id": root.id})
        other = await dept_service.create({"name": "销售部", "code": "SALES"})
        await dept_service.create({"name": "销售一组", "code": "S1", "parent_id": other.id})

        await dept_service.batch_delete([root.id, child.id, other.id])

        remaining = await dept_service.get_tree()
        assert [node["code"] for node in remaining] == ["SALES"]


class TestMenuService:

    @pytest.mark.asyncio
    async def test_invalid_icon_and_type(self, menu_service):
        with pytest.raises(ValidationError):
            await menu_service.create({"name": "首页", "icon": "NotAnIcon"})
        with pytest.raises(ValidationError):
            await menu_service.create({"name": "首页", "type": 9})

        menu = await menu_service.create({"name": "首页", "icon": "HomeOutlined"})
        assert menu.icon == "HomeOutlined"

    @pytest.mark.asyncio
    async def test_delete_cascades_to_descendants(self, menu_service, role_service):
        root = await menu_service.create({"name": "系统管理", "type": 1})
        child = await menu_service.create({"name": "用户管理", "parent_id": root.id})
        button = await menu_service.create({"name": "新增", "type": 3, "parent_id": child.id})
        other = await menu_service.create({"name": "首页"})
        role = await role_service.create({
            "name": "编辑", "code": "editor", "menu_ids": [root.id, button.id, other.id]
        })

        await menu_service.delete(root.id)

        for menu_id in (root.id, child.id, button.id):
            assert await menu_service.get_by_id(menu_id) is None
        assert [node["id"] for node in await menu_service.get_tree()] == [other.id]
        assert (await role_service.get_by_id(role.id)).menu_ids == [other.id]

    @pytest.mark.asyncio
    async def test_parent_cycle_rejected(self, menu_service):
        root = await menu_service.create({"name": "系统管理", "type": 1})
        child = await menu_service.create({"name": "用户管理", "parent_id": root.id})

        with pytest.raises(BadRequest):
            await menu_service.update(root.id, {"parent_id": child.id})

    @pytest.mark.asyncio
    async def test_update_sort(self, menu_service):
        root = await menu_service.create({"name": "系统管理", "type": 1, "sort": 1})
        a = await menu_service.create({"name": "A", "sort": 1})
        b = await menu_service.create({"name": "B", "sort": 2})

        await menu_service.update_sort([
            {"id": b.id, "sort": 0},
            {"id": a.id, "sort": 5, "parent_id": root.id},
        ])

        tree = await menu_service.get_tree()
        assert [node["name"] for node in tree] == ["B", "系统管理"]
        assert [node["name"] for node in tree[1]["children"]] == ["A"]

    @pytest.mark.asyncio
    async def test_update_sort_missing_menu_rolls_back(self, menu_service):
        a = await menu_service.create({"name": "A", "sort": 1})

        with pytest.raises(NotFoundError):
            await menu_service.update_sort([{"id": a.id, "sort": 9}, {"id": uuid.uuid4(), "sort": 1}])

        assert (await menu_service.get_by_id(a.id)).sort == 1

    @pytest.mark.asyncio
    async def test_update_sort_rejects_moving_under_own_child(self, menu_service):
        parent = await menu_service.create({"name": "A", "type": 1})
        child = await menu_service.create({"name": "B", "parent_id": parent.id})

        with pytest.raises(BadRequest):
            await menu_service.update_sort([{"id": parent.id, "sort": 0, "parent_id": child.id}])

        tree = await menu_service.get_tree()
        assert [node["id"] for node in tree] == [parent.id]
        assert [node["id"] for node in tree[0]["children"]] == [child.id]

    @pytest.mark.asyncio
    async def test_update_sort_rejects_swapped_parents(self, menu_service):
        a = await menu_service.create({"name": "A"})
        b = await menu_service.create({"name": "B"})

        with pytest.raises(BadRequest):
            await menu_service.update_sort([
                {"id": a.id, "sort": 0, "parent_id": b.id},
                {"id": b.id, "sort": 0, "parent_id": a.id},
            ])

        assert (await menu_service.get_by_id(a.id)).parent_id is None
        assert (await menu_service.get_by_id(b.id)).parent_id is None

    @pytest.mark.asyncio
    async def test_update_sort_missing_parent(self, menu_service):
        a = await menu_service.create({"name": "A"})

        with pytest.raises(NotFoundError):
            await menu_service.update_sort([{"id": a.id, "sort": 0, "parent_id": uuid.uuid4()}])

    @pytest.mark.asyncio
    async def test_update_sort_duplicate_ids_rejected(self, menu_service):
        a = await menu_service.create({"name": "A", "sort": 5})
        b = await menu_service.create({"name": "B", "sort": 6})

        with pytest.raises(ValidationError):
            await menu_service.update_sort([
                {"id": a.id, "sort": 1}, {"id": a.id, "sort": 2}, {"id": b.id, "sort": 9},
            ])

        assert (await menu_service.get_by_id(b.id)).sort == 6

    @pytest.mark.asyncio
    async def test_update_sort_each_item_keeps_its_values(self, menu_service):
        a = await menu_service.create({"name": "A", "sort": 5})
        b = await menu_service.create({"name": "B", "sort": 6})

        await menu_service.update_sort([{"id": str(b.id), "sort": 9}, {"id": a.id, "sort": 1}])

        assert (await menu_service.get_by_id(a.id)).sort == 1
        assert (await menu_service.get_by_id(b.id)).sort == 9

    @pytest.mark.asyncio
    async def test_copy_menu(self, menu_service):
        root = await menu_service.create({"name": "系统管理", "type": 1})
        menu = await menu_service.create({
            "name": "用户管理", "parent_id": root.id, "path": "/system/user", "icon": "UserOutlined"
        })

        copy = await menu_service.copy_menu(menu.id)

        assert copy.name == "用户管理(副本)"
        assert copy.parent_id == root.id
        assert copy.path == "/system/user"
        assert copy.icon == "UserOutlined"

    def test_icons(self):
        icons = MenuService.get_icons()

        assert len(icons) == 30
        assert {"HomeOutlined", "UserOutlined"} <= {icon["name"] for icon in icons}
