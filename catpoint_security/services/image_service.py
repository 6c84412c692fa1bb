"""Image classification services that answer "is there a cat in this image?"."""

import os
import random
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np

from .interfaces import ImageServiceInterface
from .errors import DetectionUnavailableError
from ..config.defaults import DETECTION_SETTINGS
from ..utils import load_image
from ..logging_config import get_logger

logger = get_logger("image_service")


class CatDetectionImageService(ImageServiceInterface):
    """Cat detection using OpenCV Haar cascades.

    Haar cascades give boxes, not scores, so each box gets a confidence
    percentage from its size and how close it sits to the frame center.
    """

    def __init__(self,
                 cascade_path: Optional[str] = None,
                 scale_factor: float = 1.1,
                 min_neighbors: int = 3,
                 min_size: int = 30,
                 max_size: int = 300):
        self.cascade_path = cascade_path
        self.haar_cascade = None
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_detection_size = (min_size, min_size)
        self.max_detection_size = (max_size, max_size)

        # Preprocessing parameters
        self.blur_kernel_size = DETECTION_SETTINGS["blur_kernel_size"]
        self.contrast_alpha = DETECTION_SETTINGS["contrast_alpha"]
        self.brightness_beta = DETECTION_SETTINGS["brightness_beta"]

    @classmethod
    def from_config(cls, config) -> "CatDetectionImageService":
        """Build a service from a SystemConfig."""
        return cls(scale_factor=config.detection_scale_factor,
                   min_neighbors=config.detection_min_neighbors,
                   min_size=config.detection_min_size,
                   max_size=config.detection_max_size)

    def load_model(self) -> None:
        """Load the cascade, trying the bundled OpenCV cat face cascades if no path was given."""
        if self.cascade_path:
            candidates = [self.cascade_path]
        else:
            candidates = [cv2.data.haarcascades + name
                          for name in DETECTION_SETTINGS["cascade_files"]]

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                self.haar_cascade = cascade
                logger.info(f"Loaded Haar cascade from {path}")
                return

        raise DetectionUnavailableError(f"No usable Haar cascade among {candidates}")

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        if self.haar_cascade is None:
            self.load_model()

        if isinstance(image, str):
            try:
                image = load_image(image)
            except OSError as e:
                raise DetectionUnavailableError(f"Could not read image: {e}") from e

        frame = np.asarray(image) if image is not None else None
        if frame is None or frame.size == 0:
            raise DetectionUnavailableError("Empty image")

        try:
            processed = self._preprocess_frame(frame)
            boxes = self._detect_with_haar_cascade(processed)
        except cv2.error as e:
            raise DetectionUnavailableError(f"Cat detection failed: {e}") from e

        confidences = [self._confidence(box, frame.shape) for box in boxes]
        best = max(confidences, default=0.0)
        logger.debug(f"{len(boxes)} candidate(s), best confidence {best:.1f}%")
        return best >= confidence_threshold

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """Convert to an equalized grayscale frame for the cascade."""
        if frame.ndim == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY)
        else:
            gray = frame

        gray = gray.astype(np.uint8)
        blurred = cv2.GaussianBlur(gray, (self.blur_kernel_size, self.blur_kernel_size), 0)
        enhanced = cv2.convertScaleAbs(blurred, alpha=self.contrast_alpha, beta=self.brightness_beta)
        return cv2.equalizeHist(enhanced)

    def _detect_with_haar_cascade(self, frame: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.haar_cascade.detectMultiScale(
            frame,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size,
            flags=cv2.CASCADE_SCALE_IMAGE
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def _confidence(self, box: Tuple[int, int, int, int], frame_shape: Tuple[int, ...]) -> float:
        """Score a box in percent: 60 base, up to 20 for centering, up to 20 for size."""
        x, y, w, h = box
        frame_h, frame_w = frame_shape[:2]

        center_x = x + w // 2
        center_y = y + h // 2
        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist)

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        confidence = 60.0 + 20.0 * center_factor + 20.0 * size_factor
        return max(0.0, min(100.0, confidence))


class FakeImageService(ImageServiceInterface):
    """Randomly decides whether an image contains a cat. For demos without a camera."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() > 0.5
