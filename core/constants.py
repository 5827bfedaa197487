"""
Spin Wheel - 全局常量与默认值
"""

import os
import sys

# === 应用根目录（frozen 兼容） ===
if getattr(sys, 'frozen', False):
    APP_DIR = os.path.dirname(sys.executable)
else:
    APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# === 应用信息 ===
APP_VERSION = "0.1.0"
CONFIG_FILE = os.path.join(APP_DIR, "settings", "item_defaults.json")


class _Unset:
    """“未设置”哨兵: 区别于 None（None 对 value 是合法的业务数据）"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()

# === 扇区（Item）默认值 ===
# 颜色为 None 时回退到轮盘调色板（按索引取色）
ITEM_DEFAULTS = {
    'background_color': None,
    'image': None,
    'image_opacity': 1,
    'image_radius': 0.5,      # 图片中心位于半径的百分比处（从圆心算起）
    'image_rotation': 0,      # 度
    'image_scale': 1,
    'label': '',
    'label_color': None,
    'value': None,
    'weight': 1,
}

# 旧版 JSON（camelCase 键）→ 新字段名
ITEM_KEY_ALIASES = {
    'backgroundColor': 'background_color',
    'imageOpacity': 'image_opacity',
    'imageRadius': 'image_radius',
    'imageRotation': 'image_rotation',
    'imageScale': 'image_scale',
    'labelColor': 'label_color',
}

# === 轮盘调色板 ===
DEFAULT_ITEM_BACKGROUND_COLORS = ['#fff']
DEFAULT_ITEM_LABEL_COLORS = ['#000']

# === 几何 ===
FULL_CIRCLE = 360.0

# === 图片加载 ===
IMAGE_LOAD_TIMEOUT = 10          # 秒，http(s) 请求超时
IMAGE_URL_SCHEMES = ('http', 'https')
