"""
API模块统一入口
backend/app/api/__init__.py
"""
from fastapi import APIRouter

from app.api.v1.endpoints import depts, i18n, i18n_modules, menus, roles, users

api_router = APIRouter()
api_router.include_router(i18n_modules.router)
api_router.include_router(i18n.router)
api_router.include_router(users.router)
api_router.include_router(roles.router)
api_router.include_router(depts.router)
api_router.include_router(menus.router)
