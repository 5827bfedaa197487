"""
Spin Wheel (PyQt6) - wheel_model.py
轮盘数据模型: 持有扇区序列，是几何（角度表）与重绘通知的唯一来源。

只实现 Item 依赖的协作接口 + 调色板回退 + 角度命中测试，
不包含绘制循环、拖拽输入和旋转物理。
"""

import logging
import random

from PyQt6.QtCore import QObject, pyqtSignal

from core.constants import (
    FULL_CIRCLE,
    DEFAULT_ITEM_BACKGROUND_COLORS,
    DEFAULT_ITEM_LABEL_COLORS,
)
from core.errors import ItemNotFoundError
from models.item import Item
from models.item_model import ItemAngle
from scene.sector_path import build_sector_path, point_at

logger = logging.getLogger(__name__)


def compute_item_angles(weights) -> list:
    """按权重把 [0, 360) 依次切分为首尾相接的区间。

    总权重为 0 时所有区间长度为 0。
    边界按累计权重计算，最后一个扇区的 end 固定为 360，不留浮点缝隙。
    """
    weights = list(weights)
    total = sum(weights)
    if not total:
        return [ItemAngle(0.0, 0.0) for _ in weights]

    angles = []
    start = 0.0
    cumulative = 0
    for i, w in enumerate(weights):
        cumulative += w
        if i == len(weights) - 1:
            end = FULL_CIRCLE
        else:
            end = FULL_CIRCLE * cumulative / total
        angles.append(ItemAngle(start, end))
        start = end
    return angles


class WheelModel(QObject):
    """轮盘: 扇区的唯一所有者

    信号:
      refresh_requested: 任意可见属性变化后发出，渲染层据此重绘
    """

    refresh_requested = pyqtSignal()

    def __init__(self, items=None, parent=None, image_loader=None):
        super().__init__(parent)
        self._items = []
        self._image_loader = image_loader
        self._refresh_count = 0
        self.item_background_colors = list(DEFAULT_ITEM_BACKGROUND_COLORS)
        self.item_label_colors = list(DEFAULT_ITEM_LABEL_COLORS)
        if items:
            self.add_items(items)

    # ── 协作接口 ──

    @property
    def items(self) -> list:
        return self._items

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    def refresh(self):
        """请求重绘（不做合并，由渲染层自行节流）"""
        self._refresh_count += 1
        self.refresh_requested.emit()

    def get_item_angles(self) -> list:
        return compute_item_angles([item.weight for item in self._items])

    # ── 扇区增删 ──

    def add_item(self, props=None) -> Item:
        item = Item(self, props, image_loader=self._image_loader)
        self._items.append(item)
        self.refresh()
        return item

    def add_items(self, props_list) -> list:
        return [self.add_item(p) for p in props_list]

    def remove_item(self, item: Item):
        """移除本轮盘持有的扇区；不属于本轮盘时抛 ItemNotFoundError"""
        index = next((i for i, it in enumerate(self._items) if it is item), -1)
        if index < 0:
            raise ItemNotFoundError('Item not found in this Wheel')
        del self._items[index]
        logger.debug(f"移除扇区 #{index}: {item!r}")
        self.refresh()

    def clear_items(self):
        self._items.clear()
        self.refresh()

    # ── 调色板回退 ──

    def get_item_background_color(self, item: Item):
        if item.background_color is not None:
            return item.background_color
        return self._palette_color(self.item_background_colors, item)

    def get_item_label_color(self, item: Item):
        if item.label_color is not None:
            return item.label_color
        return self._palette_color(self.item_label_colors, item)

    @staticmethod
    def _palette_color(palette, item: Item):
        if not palette:
            return None
        return palette[item.get_index() % len(palette)]

    # ── 命中测试 / 随机选择 ──

    def get_item_index_at_angle(self, angle: float) -> int:
        """返回包含 angle 的扇区索引，没有则返回 -1。

        每个扇区包含 [start, end)，相邻扇区的共享边界归后一个扇区；
        360° 归一化为 0°。长度为 0 的扇区永远不会命中。
        """
        a = angle % FULL_CIRCLE
        for i, item_angle in enumerate(self.get_item_angles()):
            if item_angle.start <= a < item_angle.end:
                return i
        return -1

    def get_random_item(self):
        """按权重随机选择一个扇区；没有可选扇区时返回 None"""
        index = self.get_item_index_at_angle(random.uniform(0, FULL_CIRCLE))
        if index < 0:
            return None
        return self._items[index]

    # ── 路径 ──

    def build_item_paths(self, cx: float, cy: float, radius: float, inner_radius: float = 0):
        """为每个扇区构建绘制/点击用的 QPainterPath"""
        for item, item_angle in zip(self._items, self.get_item_angles()):
            item.path = build_sector_path(
                cx, cy, radius, item_angle.start, item_angle.end, inner_radius)

    def get_item_image_pos(self, item: Item, cx: float, cy: float, radius: float):
        """图片中心点: 扇区中线上、距圆心 radius * image_radius 处"""
        return point_at(cx, cy, radius * item.image_radius, item.get_center_angle())
