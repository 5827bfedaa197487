"""
Spin Wheel (PyQt6) - item.py
轮盘扇区实体: 属性校验/回退、按权重推导角度、异步绑定图片。

角度不缓存: 每次查询都向所属轮盘要最新的角度表，
增删扇区或修改权重后不会出现过期角度。
"""

import logging
import random

from PyQt6.QtGui import QPainterPath

from core import config_manager
from core.errors import InvalidArgumentError, ItemNotFoundError
from engine import image_loader as _image_loader
from models.item_model import ItemProps, ItemAngle, IWheel, is_valid

logger = logging.getLogger(__name__)


def _looks_like_wheel(obj) -> bool:
    # 不 import WheelModel（会循环引用），只检查协作接口
    return (isinstance(obj, IWheel)
            and callable(obj.refresh)
            and callable(obj.get_item_angles))


class Item:
    """轮盘上的一个扇区

    所有属性（value 除外）的 setter 遵循同一规则:
      类型符合 → 保存；否则静默回退为默认值；然后通知轮盘重绘。
    """

    def __init__(self, wheel, props=None, image_loader=None):
        if not _looks_like_wheel(wheel):
            raise InvalidArgumentError('wheel must be an instance of Wheel')
        if props is not None and not isinstance(props, (dict, ItemProps)):
            raise InvalidArgumentError('props must be a dict or None')

        self._wheel = wheel
        self._load_image = image_loader or _image_loader.load_image

        # 先用默认值填满私有字段，逐个 setter 初始化时不会读到缺失状态
        for name, val in config_manager.get_item_defaults().items():
            setattr(self, '_' + name, val)
        self._image_obj = None
        self._image_generation = 0

        # 由渲染层构建（见 WheelModel.build_item_paths）
        self.path = QPainterPath()

        if props is None:
            self.init(config_manager.get_item_defaults())
        else:
            self.init(props)

    def init(self, props=None):
        """按 props 初始化全部属性；未给出的字段回退为默认值"""
        if props is None:
            props = ItemProps()
        elif isinstance(props, dict):
            props = ItemProps.from_dict(props)

        self.background_color = props.background_color
        self.image = props.image
        self.image_opacity = props.image_opacity
        self.image_radius = props.image_radius
        self.image_rotation = props.image_rotation
        self.image_scale = props.image_scale
        self.label = props.label
        self.label_color = props.label_color
        self.value = props.value
        self.weight = props.weight

    def to_props(self) -> ItemProps:
        """当前属性快照（保存 / 复制扇区用）"""
        return ItemProps(
            background_color=self._background_color,
            image=self._image,
            image_opacity=self._image_opacity,
            image_radius=self._image_radius,
            image_rotation=self._image_rotation,
            image_scale=self._image_scale,
            label=self._label,
            label_color=self._label_color,
            value=self._value,
            weight=self._weight,
        )

    @property
    def wheel(self):
        return self._wheel

    # ── 通用 setter ──

    def _assign(self, name, val, refresh=True):
        if is_valid(name, val):
            setattr(self, '_' + name, val)
        else:
            setattr(self, '_' + name, config_manager.get_item_default(name))
        if refresh:
            self._wheel.refresh()

    # ── 属性 ──

    @property
    def background_color(self):
        """背景色（CSS 颜色字符串）。None 时回退到轮盘的 item_background_colors"""
        return self._background_color

    @background_color.setter
    def background_color(self, val):
        self._assign('background_color', val)

    @property
    def image(self):
        """绘制在背景之上的图片 url，超出扇区的部分被裁剪"""
        return self._image

    @image.setter
    def image(self, val):
        # 新请求使旧请求作废（旧请求晚到的结果会被丢弃）
        self._image_generation += 1
        self._image_obj = None
        if not is_valid('image', val):
            val = config_manager.get_item_default('image')
        self._image = val
        if val is not None:
            generation = self._image_generation
            self._load_image(val, lambda image: self._on_image_loaded(generation, image))
        self._wheel.refresh()

    @property
    def image_obj(self):
        """已加载的图片（QImage）；加载完成前为 None"""
        return self._image_obj

    def _on_image_loaded(self, generation, image):
        if generation != self._image_generation:
            logger.debug(f"丢弃过期的图片加载结果 (gen {generation} < {self._image_generation})")
            return
        if image is None:
            return
        self._image_obj = image
        self._wheel.refresh()

    @property
    def image_opacity(self):
        """图片不透明度（0~1）"""
        return self._image_opacity

    @image_opacity.setter
    def image_opacity(self, val):
        self._assign('image_opacity', val)

    @property
    def image_radius(self):
        """图片中心在半径上的位置（百分比，从圆心算起）"""
        return self._image_radius

    @image_radius.setter
    def image_radius(self, val):
        self._assign('image_radius', val)

    @property
    def image_rotation(self):
        return self._image_rotation

    @image_rotation.setter
    def image_rotation(self, val):
        self._assign('image_rotation', val)

    @property
    def image_scale(self):
        return self._image_scale

    @image_scale.setter
    def image_scale(self, val):
        self._assign('image_scale', val)

    @property
    def label(self):
        return self._label

    @label.setter
    def label(self, val):
        self._assign('label', val)

    @property
    def label_color(self):
        """文字颜色。None 时回退到轮盘的 item_label_colors"""
        return self._label_color

    @label_color.setter
    def label_color(self, val):
        self._assign('label_color', val)

    @property
    def value(self):
        """业务数据（如数据库 id），不参与绘制和几何计算"""
        return self._value

    @value.setter
    def value(self, val):
        # 不做类型转换，也不触发重绘
        self._assign('value', val, refresh=False)

    @property
    def weight(self):
        """相对其他扇区的比例。例如权重 1 和 2 的两个扇区分别占 1/3 和 2/3"""
        return self._weight

    @weight.setter
    def weight(self, val):
        # 角度在查询时按最新权重计算，这里无需通知
        self._assign('weight', val, refresh=False)

    # ── 几何查询 ──

    def get_index(self) -> int:
        """本扇区在轮盘中的位置（0 起）。已被移除时抛 ItemNotFoundError"""
        for i, item in enumerate(self._wheel.items):
            if item is self:
                return i
        raise ItemNotFoundError('Item not found in parent Wheel')

    def _get_angle(self) -> ItemAngle:
        index = self.get_index()
        return self._wheel.get_item_angles()[index]

    def get_start_angle(self) -> float:
        """起始角（含），不考虑轮盘当前旋转"""
        return self._get_angle().start

    def get_end_angle(self) -> float:
        """结束角（含），与下一个扇区的起始角相同"""
        return self._get_angle().end

    def get_center_angle(self) -> float:
        angle = self._get_angle()
        return angle.start + (angle.end - angle.start) / 2

    def get_random_angle(self) -> float:
        """[start, end] 内均匀分布的随机角: 加权随机选中扇区的基础"""
        angle = self._get_angle()
        return random.uniform(angle.start, angle.end)

    def __repr__(self):
        return f"Item(label={self._label!r}, weight={self._weight!r})"
