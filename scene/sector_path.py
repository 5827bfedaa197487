"""
Spin Wheel (PyQt6) - sector_path.py
扇区路径构建: 供渲染层绘制与点击检测。

轮盘角度: 0° = 正上方，顺时针增加
Qt 弧度:  0° = 右侧(3 点钟)，逆时针增加
"""

import math

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QPainterPath


def to_qt_angle(angle: float) -> float:
    """轮盘角度 → Qt arcTo 角度"""
    return 90.0 - angle


def build_sector_path(cx, cy, radius, start_angle, end_angle, inner_radius=0) -> QPainterPath:
    """构建 [start_angle, end_angle] 的扇形（inner_radius > 0 时为环形扇区）"""
    path = QPainterPath()
    span = end_angle - start_angle
    if radius <= 0 or span <= 0:
        return path

    qs = to_qt_angle(start_angle)
    outer_rect = QRectF(cx - radius, cy - radius, radius * 2, radius * 2)

    if inner_radius <= 0:
        path.moveTo(cx, cy)
        path.arcTo(outer_rect, qs, -span)
        path.closeSubpath()
        return path

    inner_rect = QRectF(cx - inner_radius, cy - inner_radius,
                        inner_radius * 2, inner_radius * 2)
    path.arcMoveTo(outer_rect, qs)
    path.arcTo(outer_rect, qs, -span)

    qe = math.radians(qs - span)
    path.lineTo(cx + inner_radius * math.cos(qe), cy - inner_radius * math.sin(qe))
    path.arcTo(inner_rect, qs - span, span)
    path.closeSubpath()
    return path


def point_at(cx, cy, radius, angle):
    """轮盘角度上距圆心 radius 处的点 (x, y)"""
    rad = math.radians(to_qt_angle(angle))
    return cx + radius * math.cos(rad), cy - radius * math.sin(rad)
