"""
Spin Wheel (PyQt6) - image_loader.py
异步图片加载: 在 QThread 中读取并解码图片，完成后回到主线程回调。

架构:
  ImageLoader(QObject): 主线程 API，持有线程引用直到结束
  _ImageLoadThread(QThread): run() 中阻塞读取 + 解码，结果经信号排队送回主线程

加载是“发射后不管”的: 不重试、不取消；失败只记日志，回调收到 None。
调用方（Item）自行用代数(generation)丢弃过期结果。
"""

import base64
import logging
import os
from urllib.parse import urlparse, unquote

import httpx
from PyQt6.QtCore import QObject, QThread, pyqtSignal
from PyQt6.QtGui import QImage

from core.constants import IMAGE_LOAD_TIMEOUT, IMAGE_URL_SCHEMES

logger = logging.getLogger(__name__)


# ─── 阻塞读取（线程内调用） ───────────────────────────────────

def _read_data_url(url: str) -> bytes:
    # data:[<mediatype>][;base64],<data>
    header, _, payload = url.partition(',')
    if header.endswith(';base64'):
        return base64.b64decode(payload)
    return unquote(payload).encode('latin-1')


def read_image_bytes(url: str) -> bytes:
    """读取图片原始字节。支持本地路径、file://、http(s)://、data:"""
    if url.startswith('data:'):
        return _read_data_url(url)

    parsed = urlparse(url)
    if parsed.scheme in IMAGE_URL_SCHEMES:
        with httpx.Client(timeout=IMAGE_LOAD_TIMEOUT, follow_redirects=True) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content

    if parsed.scheme == 'file':
        path = unquote(parsed.path)
    else:
        path = url
    with open(os.path.expanduser(path), 'rb') as f:
        return f.read()


def read_image(url: str):
    """读取并解码图片。失败返回 None（不抛异常）。

    Returns:
        QImage | None
    """
    try:
        data = read_image_bytes(url)
    except Exception as e:
        logger.warning(f"图片读取失败: {url} ({e})")
        return None

    image = QImage()
    if not image.loadFromData(data):
        logger.warning(f"图片解码失败: {url}")
        return None
    return image


# ─── 线程 ────────────────────────────────────────────────────

class _ImageLoadThread(QThread):
    """单次图片加载线程: 直接子类化 QThread"""

    # QImage 是隐式共享的值类型，可以跨线程传递（QPixmap 不行）
    image_loaded = pyqtSignal(object)  # QImage | None

    def __init__(self, url: str, parent=None):
        super().__init__(parent)
        self._url = url

    def run(self):
        self.image_loaded.emit(read_image(self._url))


class ImageLoader(QObject):
    """图片加载器: 每个请求一个线程，结果在主线程回调"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._threads = set()

    @property
    def pending(self) -> int:
        return len(self._threads)

    def load(self, url: str, callback):
        """开始异步加载 url，完成后以 callback(QImage | None) 通知。"""
        thread = _ImageLoadThread(url)
        self._threads.add(thread)
        thread.image_loaded.connect(callback)
        thread.finished.connect(lambda: self._on_thread_finished(thread))
        thread.start()
        logger.debug(f"开始加载图片: {url}")
        return thread

    def wait_all(self, msecs: int = 5000) -> bool:
        """等待所有线程结束（关闭程序 / 测试时使用）"""
        ok = True
        for thread in list(self._threads):
            ok = thread.wait(msecs) and ok
        return ok

    def _on_thread_finished(self, thread):
        self._threads.discard(thread)
        thread.deleteLater()


# ─── 模块级默认加载器 ─────────────────────────────────────────

_default_loader = None


def get_default_loader() -> ImageLoader:
    global _default_loader
    if _default_loader is None:
        _default_loader = ImageLoader()
    return _default_loader


def load_image(url: str, callback):
    """Item 使用的默认加载函数: load_image(url, callback)"""
    return get_default_loader().load(url, callback)
