"""
菜单图标注册表
backend/app/enums/menu_icons.py
"""
from enum import Enum
from typing import Dict, List, Optional


class MenuIcon(Enum):
    """
    菜单可选图标
    每个枚举值格式: (图标名称, 前端组件名, 分类)
    """

    def __new__(cls, icon_name: str, component: str, category: str):
        obj = object.__new__(cls)
        obj._value_ = icon_name
        obj.component = component
        obj.category = category
        return obj

    # 通用
    HOME = ("HomeOutlined", "@ant-design/icons/HomeOutlined", "general")
    DASHBOARD = ("DashboardOutlined", "@ant-design/icons/DashboardOutlined", "general")
    APPSTORE = ("AppstoreOutlined", "@ant-design/icons/AppstoreOutlined", "general")
    MENU = ("MenuOutlined", "@ant-design/icons/MenuOutlined", "general")
    SETTING = ("SettingOutlined", "@ant-design/icons/SettingOutlined", "general")

    # 用户与权限
    USER = ("UserOutlined", "@ant-design/icons/UserOutlined", "user")
    TEAM = ("TeamOutlined", "@ant-design/icons/TeamOutlined", "user")
    SAFETY = ("SafetyOutlined", "@ant-design/icons/SafetyOutlined", "security")
    LOCK = ("LockOutlined", "@ant-design/icons/LockOutlined", "security")
    KEY = ("KeyOutlined", "@ant-design/icons/KeyOutlined", "security")

    # 数据与文件
    FILE = ("FileOutlined", "@ant-design/icons/FileOutlined", "data")
    FOLDER = ("FolderOutlined", "@ant-design/icons/FolderOutlined", "data")
    DATABASE = ("DatabaseOutlined", "@ant-design/icons/DatabaseOutlined", "data")
    CLOUD = ("CloudOutlined", "@ant-design/icons/CloudOutlined", "data")

    # 开发
    TOOL = ("ToolOutlined", "@ant-design/icons/ToolOutlined", "development")
    CODE = ("CodeOutlined", "@ant-design/icons/CodeOutlined", "development")
    BUG = ("BugOutlined", "@ant-design/icons/BugOutlined", "development")
    LINK = ("LinkOutlined", "@ant-design/icons/LinkOutlined", "development")

    # 消息与日程
    MAIL = ("MailOutlined", "@ant-design/icons/MailOutlined", "communication")
    MESSAGE = ("MessageOutlined", "@ant-design/icons/MessageOutlined", "communication")
    BELL = ("BellOutlined", "@ant-design/icons/BellOutlined", "communication")
    CALENDAR = ("CalendarOutlined", "@ant-design/icons/CalendarOutlined", "communication")
    CLOCK_CIRCLE = ("ClockCircleOutlined", "@ant-design/icons/ClockCircleOutlined", "communication")
    ENVIRONMENT = ("EnvironmentOutlined", "@ant-design/icons/EnvironmentOutlined", "communication")
    GLOBAL = ("GlobalOutlined", "@ant-design/icons/GlobalOutlined", "communication")

    # 多媒体
    PICTURE = ("PictureOutlined", "@ant-design/icons/PictureOutlined", "media")
    PLAY_CIRCLE = ("PlayCircleOutlined", "@ant-design/icons/PlayCircleOutlined", "media")
    SOUND = ("SoundOutlined", "@ant-design/icons/SoundOutlined", "media")
    VIDEO_CAMERA = ("VideoCameraOutlined", "@ant-design/icons/VideoCameraOutlined", "media")
    CAMERA = ("CameraOutlined", "@ant-design/icons/CameraOutlined", "media")

    @classmethod
    def get_by_name(cls, icon_name: str) -> Optional["MenuIcon"]:
        return _ICON_INDEX.get(icon_name)

    @classmethod
    def is_valid(cls, icon_name: str) -> bool:
        return icon_name in _ICON_INDEX

    @classmethod
    def names(cls) -> List[str]:
        return [icon.value for icon in cls]

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.value, "component": self.component, "category": self.category}


# 启动时构建一次的名称索引
_ICON_INDEX: Dict[str, MenuIcon] = {icon.value: icon for icon in MenuIcon}
