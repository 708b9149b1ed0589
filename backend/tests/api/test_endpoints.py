"""
HTTP接口测试：统一响应格式、驼峰字段、错误码映射
"""
import uuid

import pytest

API = "/api/v1"


async def _create_module(client, code="common", name="通用"):
    response = await client.post(f"{API}/i18n-modules", json={"code": code, "name": name})
    assert response.status_code == 200
    return response.json()["data"]


class TestEnvelope:

    @pytest.mark.asyncio
    async def test_success_envelope_and_camel_case(self, client):
        response = await client.post(
            f"{API}/i18n-modules", json={"code": "common", "name": "通用", "description": "通用词条"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == "00000"
        assert body["msg"] == "创建成功"
        assert "timestamp" in body
        assert body["data"]["code"] == "common"
        assert "createdAt" in body["data"]
        assert "created_at" not in body["data"]
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_paginated_list_shape(self, client):
        for i in range(3):
            await _create_module(client, code=f"mod{i}", name=f"模块{i}")

        response = await client.get(f"{API}/i18n-modules", params={"page": 1, "pageSize": 2})

        data = response.json()["data"]
        assert data["pagination"] == {"page": 1, "pageSize": 2, "total": 3}
        assert [item["code"] for item in data["list"]] == ["mod2", "mod1"]

    @pytest.mark.asyncio
    async def test_snake_case_input_accepted(self, client):
        module = await _create_module(client)

        response = await client.post(
            f"{API}/i18n", json={"module_id": module["id"], "key": "save", "zh_cn": "保存"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["zhCn"] == "保存"
        assert response.json()["data"]["moduleCode"] == "common"


class TestErrors:

    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.get(f"{API}/i18n-modules/{uuid.uuid4()}")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "30001"
        assert body["msg"] == "模块不存在"
        assert body["request_id"]

    @pytest.mark.asyncio
    async def test_conflict(self, client):
        await _create_module(client)

        response = await client.post(f"{API}/i18n-modules", json={"code": "common", "name": "重复"})

        assert response.status_code == 409
        assert response.json()["code"] == "30009"
        assert response.json()["msg"] == "模块代码已存在"

    @pytest.mark.asyncio
    async def test_request_validation(self, client):
        response = await client.post(f"{API}/i18n-modules", json={"code": "common"})

        assert response.status_code == 422
        assert response.json()["code"] == "10001"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"pageSize": -1}])
    async def test_invalid_pagination(self, client, params):
        response = await client.get(f"{API}/users", params=params)

        assert response.status_code == 422
        assert response.json()["code"] == "10001"

    @pytest.mark.asyncio
    async def test_bad_request(self, client):
        parent = (await client.post(f"{API}/depts", json={"name": "总部", "code": "HQ"})).json()["data"]
        await client.post(f"{API}/depts", json={"name": "研发部", "code": "RD", "parentId": parent["id"]})

        response = await client.delete(f"{API}/depts/{parent['id']}")

        assert response.status_code == 400
        assert response.json()["code"] == "10002"
        assert response.json()["msg"] == "存在子部门，无法删除"


class TestResources:

    @pytest.mark.asyncio
    async def test_module_code_immutable(self, client):
        module = await _create_module(client)

        response = await client.put(
            f"{API}/i18n-modules/{module['id']}", json={"code": "changed", "name": "通用模块"}
        )

        assert response.json()["data"]["code"] == "common"
        assert response.json()["data"]["name"] == "通用模块"

    @pytest.mark.asyncio
    async def test_translations_and_import(self, client):
        response = await client.post(f"{API}/i18n/import", json={
            "items": [{"module": "common", "key": "save", "zhCn": "保存", "enUs": "Save"}],
            "nested": {"zh-CN": {"menu": {"home": "首页"}}},
        })

        result = response.json()["data"]
        assert result["created"] == 2
        assert result["errors"] == []

        translations = (await client.get(f"{API}/i18n/translations")).json()["data"]
        assert translations["zh-CN"] == {"common.save": "保存", "menu.home": "首页"}

        exported = (await client.get(f"{API}/i18n/export/en-US")).json()["data"]
        assert exported == {"common": {"save": "Save"}, "menu": {"home": ""}}

    @pytest.mark.asyncio
    async def test_user_password_never_returned(self, client):
        response = await client.post(
            f"{API}/users", json={"username": "zhangsan", "password": "secret123", "email": "zhangsan@company.com"}
        )

        data = response.json()["data"]
        assert "password" not in data
        assert data["username"] == "zhangsan"

        reset = await client.post(f"{API}/users/{data['id']}/reset-password")
        assert len(reset.json()["data"]["password"]) == 8

    @pytest.mark.asyncio
    async def test_menu_tree_camel_case(self, client):
        root = (await client.post(f"{API}/menus", json={"name": "系统管理", "type": 1})).json()["data"]
        await client.post(f"{API}/menus", json={"name": "用户管理", "parentId": root["id"], "isCache": 1})

        tree = (await client.get(f"{API}/menus/tree")).json()["data"]

        assert tree[0]["name"] == "系统管理"
        assert tree[0]["children"][0]["parentId"] == root["id"]
        assert tree[0]["children"][0]["isCache"] == 1
        assert tree[0]["children"][0]["children"] == []

    @pytest.mark.asyncio
    async def test_batch_delete(self, client):
        module = await _create_module(client)

        payload = {"ids": [module["id"], str(uuid.uuid4())]}
        first = await client.post(f"{API}/i18n-modules/batch-delete", json=payload)
        second = await client.post(f"{API}/i18n-modules/batch-delete", json=payload)

        assert first.json()["code"] == "00000"
        assert second.json()["code"] == "00000"
        listing = (await client.get(f"{API}/i18n-modules")).json()["data"]
        assert listing["pagination"]["total"] == 0
