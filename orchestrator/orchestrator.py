"""Frame loop driving the cone pipeline for one session."""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Protocol

import numpy as np

from cv.overlay import annotate_frame
from cv.pipeline import ConePipeline
from cv.types import MarkerDetections, SteeringObservation
from orchestrator.types import OrchestratorState
from vehicle.state import VehicleStateCache

if TYPE_CHECKING:
    from cv.overlay import DisplayRenderer
    from streaming.frame_source import FrameSource

logger = logging.getLogger(__name__)


class SteeringSink(Protocol):
    def emit(self, observation: SteeringObservation) -> None:
        ...


class FrameOrchestrator:
    """
    Pulls frames, runs the pipeline and emits steering values.

    The loop alternates between WAITING_FOR_FRAME and PROCESSING until the
    session ends, then settles in STOPPED. A failure inside one frame is
    logged and the loop moves on to the next frame.
    """

    def __init__(
        self,
        source: "FrameSource",
        vehicle_state: VehicleStateCache,
        sink: SteeringSink,
        pipeline: ConePipeline | None = None,
        renderer: "DisplayRenderer | None" = None,
        session_active: Callable[[], bool] | None = None,
    ):
        self._source = source
        self._vehicle_state = vehicle_state
        self._sink = sink
        self._pipeline = pipeline or ConePipeline()
        self._renderer = renderer
        self._session_active = session_active
        self._stop_event = threading.Event()
        self._state = OrchestratorState.WAITING_FOR_FRAME
        self.frames_processed = 0
        self.emissions = 0

    @property
    def state(self) -> OrchestratorState:
        return self._state

    def is_active(self) -> bool:
        if self._stop_event.is_set():
            return False
        return self._session_active is None or bool(self._session_active())

    def stop(self) -> None:
        """Request loop exit; honoured at the start of the next iteration."""
        self._stop_event.set()

    def _acquire_frame(self) -> tuple[np.ndarray, int]:
        pixels = self._source.lock_and_copy()
        try:
            timestamp_us = self._source.current_timestamp_us()
        finally:
            self._source.unlock()
        return pixels, timestamp_us

    def _render(self, pixels: np.ndarray, detections: MarkerDetections, timestamp_us: int) -> None:
        try:
            self._renderer.render(annotate_frame(pixels, detections, timestamp_us))
        except Exception:
            logger.exception("Rendering frame ts=%s failed", timestamp_us)

    def process_frame(self, pixels: np.ndarray, timestamp_us: int) -> list[SteeringObservation]:
        """Run one frame end to end and emit every pair's steering value."""
        state = self._vehicle_state.snapshot()
        detections = self._pipeline.detect(pixels)

        emitted: list[SteeringObservation] = []
        for observation in self._pipeline.observations(detections, state, timestamp_us):
            self._sink.emit(observation)
            emitted.append(observation)
        self.emissions += len(emitted)

        if self._renderer is not None:
            self._render(pixels, detections, timestamp_us)
        return emitted

    def run(self) -> None:
        logger.info("Frame loop started for '%s'", self._source.name)
        try:
            while self.is_active():
                self._state = OrchestratorState.WAITING_FOR_FRAME
                if not self._source.wait_for_frame():
                    logger.info("Frame source '%s' closed", self._source.name)
                    break

                try:
                    pixels, timestamp_us = self._acquire_frame()
                except Exception:
                    logger.exception("Copying frame from '%s' failed", self._source.name)
                    continue

                self._state = OrchestratorState.PROCESSING
                try:
                    self.process_frame(pixels, timestamp_us)
                except Exception:
                    logger.exception("Processing frame ts=%s failed", timestamp_us)
                finally:
                    self.frames_processed += 1
        finally:
            self._state = OrchestratorState.STOPPED
            logger.info(
                "Frame loop stopped after %d frames, %d steering values",
                self.frames_processed,
                self.emissions,
            )
