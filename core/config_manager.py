"""
Spin Wheel - 配置管理器

负责进程级扇区默认值的读取、覆盖与重置。
默认值存储在 settings/item_defaults.json（可选），格式:
    {"item": {"label": "?", "weight": 2, ...}}
也接受不带 "item" 外层的扁平 dict；camelCase 旧键自动映射。
"""

import copy
import json
import logging
import os

from core.constants import CONFIG_FILE, ITEM_DEFAULTS, UNSET
from models.item_model import is_valid, normalize_keys, NULLABLE_FIELDS

logger = logging.getLogger(__name__)

# 当前生效的默认值（进程级，所有 Item 共享）
_item_defaults = copy.deepcopy(ITEM_DEFAULTS)


# ─── 内部工具 ────────────────────────────────────────────────

def _accepts(name: str, val) -> bool:
    if val is UNSET:
        return False
    if val is None:
        return name in NULLABLE_FIELDS
    return is_valid(name, val)


# ─── 读取 / 修改 ─────────────────────────────────────────────

def get_item_defaults() -> dict:
    """返回当前默认值的副本"""
    return dict(_item_defaults)


def get_item_default(name: str):
    """返回单个字段的当前默认值。未知字段抛 KeyError。"""
    return _item_defaults[name]


def set_item_default(name: str, val) -> bool:
    """覆盖单个字段的默认值。

    Returns:
        bool: 是否生效（未知字段或类型不符时返回 False，原值不变）
    """
    if name not in _item_defaults:
        logger.warning(f"未知的扇区默认值字段: {name!r}")
        return False
    if not _accepts(name, val):
        logger.warning(f"默认值类型不符，已忽略: {name}={val!r}")
        return False
    _item_defaults[name] = val
    return True


def reset_item_defaults():
    """恢复内置默认值"""
    _item_defaults.clear()
    _item_defaults.update(copy.deepcopy(ITEM_DEFAULTS))


# ─── 文件加载 ────────────────────────────────────────────────

def load_item_defaults(filepath: str = CONFIG_FILE) -> dict:
    """从 JSON 文件加载默认值覆盖。

    文件缺失或损坏时保持现有默认值不变。

    Returns:
        dict: 实际生效的字段
    """
    applied = {}
    if not os.path.exists(filepath):
        logger.info(f"默认值文件不存在，使用内置默认值: {filepath}")
        return applied
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except Exception as e:
        logger.error(f"默认值文件加载失败: {e}")
        return applied

    if not isinstance(data, dict):
        logger.error(f"默认值文件格式错误（应为 JSON 对象）: {filepath}")
        return applied

    raw = data.get('item', data)
    if not isinstance(raw, dict):
        logger.error(f"默认值文件中 'item' 应为对象: {filepath}")
        return applied

    for name, val in normalize_keys(raw).items():
        if set_item_default(name, val):
            applied[name] = val

    logger.info(f"已加载扇区默认值: {len(applied)} 项 ({filepath})")
    return applied


def save_item_defaults(filepath: str = CONFIG_FILE):
    """保存当前默认值到 JSON 文件（value 不可序列化时跳过）"""
    out = {}
    for name, val in _item_defaults.items():
        try:
            json.dumps(val)
        except (TypeError, ValueError):
            logger.warning(f"默认值不可序列化，跳过: {name}")
            continue
        out[name] = val

    dirname = os.path.dirname(filepath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump({'item': out}, f, ensure_ascii=False, indent=2)
    except Exception as e:
        logger.error(f"默认值保存失败: {e}")
