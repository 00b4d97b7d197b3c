"""
Frame sources feeding the steering loop.

A source hands out frames through a short exclusive lease: the consumer
waits for a new frame, takes the lease with ``lock_and_copy``, reads the
capture timestamp and gives the lease back with ``unlock``.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Protocol, Union
from urllib.parse import urlparse

import cv2
import numpy as np

from orchestrator.exceptions import AdapterUnavailableError

logger = logging.getLogger(__name__)

BGRA_CHANNELS = 4
PIXEL_FORMAT = "BGRA"


class FrameSource(Protocol):
    """Contract between the orchestrator and whatever produces pixels."""

    name: str
    width: int
    height: int
    pixel_format: str

    def wait_for_frame(self, timeout: float | None = None) -> bool:
        ...

    def lock_and_copy(self) -> np.ndarray:
        ...

    def unlock(self) -> None:
        ...

    def current_timestamp_us(self) -> int:
        ...

    def close(self) -> None:
        ...


def parse_source(name: str) -> Union[str, int]:
    """Camera indices are given as plain digits; everything else is a path or URL."""
    name = name.strip()
    return int(name) if name.isdigit() else name


def _is_remote_stream_url(source: Union[str, int]) -> bool:
    if not isinstance(source, str):
        return False
    scheme = urlparse(source).scheme.lower()
    return scheme in {"rtsp", "rtsps", "http", "https", "rtmp", "udp", "tcp"}


def to_bgra(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize to ``width`` x ``height`` and convert to contiguous BGRA."""
    if frame.shape[1] != width or frame.shape[0] != height:
        frame = cv2.resize(frame, (width, height))
    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2BGRA)
    if frame.shape[2] == BGRA_CHANNELS:
        return np.ascontiguousarray(frame)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2BGRA)


class VideoFrameSource:
    """
    OpenCV capture adapter (file, URL or camera index).

    A reader thread decodes frames into a single shared buffer. Writes to the
    buffer and consumer leases use the same lock, so a copy never observes a
    half-written frame.
    """

    def __init__(self, source: Union[str, int], width: int, height: int, loop: bool = False):
        self.source = source
        self.name = str(source)
        self.width = width
        self.height = height
        self.pixel_format = PIXEL_FORMAT
        self.loop = loop
        self._cap: cv2.VideoCapture | None = None
        self._thread: threading.Thread | None = None
        self._lease = threading.Lock()
        self._ready = threading.Condition()
        self._buffer: np.ndarray | None = None
        self._timestamp_us = 0
        self._frame_index = 0
        self._consumed_index = 0
        self._closed = threading.Event()

    @property
    def size(self) -> int:
        return self.width * self.height * BGRA_CHANNELS

    def open(self) -> "VideoFrameSource":
        cap = cv2.VideoCapture(self.source)
        if not cap.isOpened():
            cap.release()
            raise AdapterUnavailableError(f"Failed to open frame source '{self.name}'")

        self._cap = cap
        self._closed.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        logger.info("Attached to frame source '%s' (%d bytes).", self.name, self.size)
        return self

    def close(self) -> None:
        self._closed.set()
        with self._ready:
            self._ready.notify_all()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=2)
            self._thread = None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def wait_for_frame(self, timeout: float | None = None) -> bool:
        """Block until an unseen frame exists; False on timeout or close."""
        with self._ready:
            self._ready.wait_for(
                lambda: self._frame_index > self._consumed_index or self._closed.is_set(),
                timeout=timeout,
            )
            if self._frame_index > self._consumed_index:
                self._consumed_index = self._frame_index
                return True
            return False

    def lock_and_copy(self) -> np.ndarray:
        self._lease.acquire()
        try:
            if self._buffer is None:
                raise RuntimeError(f"No frame available from '{self.name}'")
            return self._buffer.copy()
        except BaseException:
            self._lease.release()
            raise

    def unlock(self) -> None:
        self._lease.release()

    def current_timestamp_us(self) -> int:
        return self._timestamp_us

    def _publish(self, pixels: np.ndarray, timestamp_us: int) -> None:
        with self._lease:
            self._buffer = pixels
            self._timestamp_us = timestamp_us
        with self._ready:
            self._frame_index += 1
            self._ready.notify_all()

    def _run(self) -> None:
        cap = self._cap
        is_remote = _is_remote_stream_url(self.source)
        fps = cap.get(cv2.CAP_PROP_FPS)
        # Only local files are paced; cameras and streams set their own cadence.
        pace = isinstance(self.source, str) and not is_remote and fps and 1 < fps <= 240
        frame_interval = 1.0 / fps if pace else None
        start_mono = time.monotonic()
        next_frame_time = start_mono
        last_ts_us = 0

        try:
            while not self._closed.is_set():
                ret, frame = cap.read()
                if not ret:
                    if self.loop and not is_remote:
                        cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
                        start_mono = time.monotonic()
                        next_frame_time = start_mono
                        continue
                    logger.info("Frame source '%s' ended", self.name)
                    break

                # Prefer capture timestamps; keep them non-decreasing.
                pos_msec = cap.get(cv2.CAP_PROP_POS_MSEC)
                if pos_msec and pos_msec > 0:
                    ts_us = int(pos_msec * 1000.0)
                else:
                    ts_us = int((time.monotonic() - start_mono) * 1_000_000)
                ts_us = max(ts_us, last_ts_us)
                last_ts_us = ts_us

                self._publish(to_bgra(frame, self.width, self.height), ts_us)

                if frame_interval is not None:
                    next_frame_time += frame_interval
                    sleep = next_frame_time - time.monotonic()
                    if sleep > 0:
                        time.sleep(sleep)
        finally:
            cap.release()
            self._closed.set()
            with self._ready:
                self._ready.notify_all()
