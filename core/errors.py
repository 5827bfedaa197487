"""
Spin Wheel - 异常类型
"""


class WheelError(Exception):
    """轮盘相关错误的基类"""


class InvalidArgumentError(WheelError, TypeError):
    """构造参数不合法（缺少轮盘引用 / props 不是 dict）"""


class ItemNotFoundError(WheelError, LookupError):
    """扇区已不在所属轮盘的 items 中（被移除后仍持有引用）"""
