"""
Spin Wheel (PyQt6) - item_model.py
扇区配置数据模型 & 字段校验表: 纯数据，不含运行时状态。
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Protocol, Sequence, runtime_checkable

from core.constants import UNSET, ITEM_KEY_ALIASES

logger = logging.getLogger(__name__)


# ─── 字段校验 ────────────────────────────────────────────────

def is_number(val) -> bool:
    # bool 是 int 的子类，但 True 不是合法的权重/比例
    return isinstance(val, (int, float)) and not isinstance(val, bool)


def is_text(val) -> bool:
    return isinstance(val, str)


def is_set(val) -> bool:
    return val is not UNSET


# 每个字段一个校验函数；构造、赋值、默认值加载共用这一张表
FIELD_VALIDATORS = {
    'background_color': is_text,
    'image': is_text,
    'image_opacity': is_number,
    'image_radius': is_number,
    'image_rotation': is_number,
    'image_scale': is_number,
    'label': is_text,
    'label_color': is_text,
    'value': is_set,
    'weight': is_number,
}

# 颜色 / 图片允许显式置空（None = 回退到调色板 / 无图）
NULLABLE_FIELDS = frozenset({'background_color', 'image', 'label_color', 'value'})


def is_valid(name: str, val) -> bool:
    """判断 val 是否符合字段 name 的预期类型。未知字段一律视为不合法。"""
    check = FIELD_VALIDATORS.get(name)
    if check is None:
        return False
    return check(val)


def normalize_keys(d: dict) -> dict:
    """camelCase 旧键 → snake_case，并丢弃未知键"""
    mapped = {}
    for k, v in d.items():
        name = ITEM_KEY_ALIASES.get(k, k)
        if name in FIELD_VALIDATORS:
            mapped[name] = v
        else:
            logger.debug(f"忽略未知扇区属性: {k!r}")
    return mapped


# ─── 数据模型 ────────────────────────────────────────────────

@dataclass
class ItemProps:
    """扇区属性包: 列出所有可识别的选项

    未传入的字段保持 UNSET，交给 Item 的 setter 回退为默认值，
    因此构造期和运行期走的是同一条校验路径。
    """
    background_color: Any = UNSET
    image: Any = UNSET
    image_opacity: Any = UNSET
    image_radius: Any = UNSET
    image_rotation: Any = UNSET
    image_scale: Any = UNSET
    label: Any = UNSET
    label_color: Any = UNSET
    value: Any = UNSET
    weight: Any = UNSET

    def to_dict(self) -> dict:
        """序列化为 dict（省略未设置的字段）

        不用 asdict：value 是任意业务对象，不能被深拷贝。
        """
        result = {}
        for f in fields(self):
            v = getattr(self, f.name)
            if v is not UNSET:
                result[f.name] = v
        return result

    @classmethod
    def from_dict(cls, d: dict) -> 'ItemProps':
        """从 dict 反序列化（兼容 camelCase 旧键，忽略未知字段）"""
        return cls(**normalize_keys(d))


@dataclass(frozen=True)
class ItemAngle:
    """扇区角度区间（度），由轮盘按权重实时计算，不持久化"""
    start: float
    end: float

    @property
    def span(self) -> float:
        return self.end - self.start


@runtime_checkable
class IWheel(Protocol):
    """Item 所需的轮盘协作接口"""

    @property
    def items(self) -> Sequence: ...

    def refresh(self) -> None: ...

    def get_item_angles(self) -> list: ...
