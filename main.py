"""
Spin Wheel (PyQt6) - Entry Point

用法:
    python main.py items.json [--defaults settings/item_defaults.json]

items.json 为扇区属性列表，如 [{"label": "A", "weight": 2}, {"label": "B"}]。
加载后按权重随机抽取一个扇区并打印。
"""

import sys
import os
import json
import argparse
import logging

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename='spinwheel.log',
    filemode='w'
)
logger = logging.getLogger(__name__)

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QGuiApplication

from core.constants import APP_VERSION, CONFIG_FILE
from core.config_manager import load_item_defaults
from engine.image_loader import get_default_loader
from models.wheel_model import WheelModel

# 等待图片加载的最长时间 (ms)
_IMAGE_WAIT_MS = 3000


def _load_items(path: str) -> list:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('items', [])
    return [d for d in data if isinstance(d, dict)]


def _report(wheel: WheelModel):
    for item in wheel.items:
        image_state = 'loaded' if item.image_obj is not None else '-'
        print(f"  #{item.get_index()} {item.label!r:16} "
              f"[{item.get_start_angle():7.2f}, {item.get_end_angle():7.2f}) "
              f"image={image_state}")
    picked = wheel.get_random_item()
    if picked is None:
        print("没有可选扇区（总权重为 0）")
    else:
        print(f"选中: {picked.label!r} (value={picked.value!r}, "
              f"angle={picked.get_random_angle():.2f})")


def main():
    parser = argparse.ArgumentParser(description=f"Spin Wheel {APP_VERSION}")
    parser.add_argument('items', help='扇区属性 JSON 文件')
    parser.add_argument('--defaults', default=CONFIG_FILE, help='扇区默认值 JSON 文件')
    args = parser.parse_args()

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication(sys.argv)
    app.setApplicationName("Spin Wheel")
    app.setApplicationVersion(APP_VERSION)

    try:
        load_item_defaults(args.defaults)
        wheel = WheelModel(_load_items(args.items))
    except Exception as e:
        logger.critical(f"Unhandled exception: {e}", exc_info=True)
        print(f"错误: {e}")
        return 1

    loader = get_default_loader()

    def _finish():
        _report(wheel)
        app.quit()

    if loader.pending:
        # 图片全部加载完（或超时）后再输出
        poll = QTimer()
        poll.setInterval(50)
        elapsed = [0]

        def _tick():
            elapsed[0] += poll.interval()
            if not loader.pending or elapsed[0] >= _IMAGE_WAIT_MS:
                poll.stop()
                _finish()

        poll.timeout.connect(_tick)
        poll.start()
        return app.exec()

    _report(wheel)
    return 0


if __name__ == "__main__":
    sys.exit(main())
