import os

# 必须在创建 QGuiApplication 之前设置
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtGui import QGuiApplication

from core import config_manager
from models.wheel_model import WheelModel, compute_item_angles


class FakeWheel:
    """最小轮盘: 只实现 Item 依赖的三个接口"""

    def __init__(self):
        self.items = []
        self.refresh_calls = 0

    def refresh(self):
        self.refresh_calls += 1

    def get_item_angles(self):
        return compute_item_angles([item.weight for item in self.items])


class FakeLoader:
    """记录加载请求，由测试决定完成顺序"""

    def __init__(self):
        self.requests = []

    def __call__(self, url, callback):
        self.requests.append((url, callback))

    def complete(self, index, image):
        _, callback = self.requests[index]
        callback(image)


@pytest.fixture(scope="session")
def qapp():
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    return app


@pytest.fixture(autouse=True)
def reset_defaults():
    config_manager.reset_item_defaults()
    yield
    config_manager.reset_item_defaults()


@pytest.fixture
def fake_wheel():
    return FakeWheel()


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def wheel(fake_loader):
    return WheelModel(image_loader=fake_loader)


@pytest.fixture
def weighted_wheel(wheel):
    # 权重 1, 1, 2 → 90°, 90°, 180°
    wheel.add_items([
        {'label': 'a', 'weight': 1},
        {'label': 'b', 'weight': 1},
        {'label': 'c', 'weight': 2},
    ])
    return wheel
