"""Unit tests for the image classification services."""

import os
import shutil
import tempfile
import unittest
from unittest.mock import Mock

import cv2
import numpy as np
from PIL import Image

from catpoint_security.models.config import SystemConfig
from catpoint_security.services.errors import DetectionUnavailableError
from catpoint_security.services.image_service import CatDetectionImageService, FakeImageService
from catpoint_security.utils import load_image


class TestCatDetectionImageService(unittest.TestCase):
    """Test cases for CatDetectionImageService."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = CatDetectionImageService()
        self.service.haar_cascade = Mock()
        self.service.haar_cascade.detectMultiScale.return_value = []
        self.frame = np.zeros((480, 640, 3), dtype=np.uint8)

    def test_initialization(self):
        service = CatDetectionImageService()
        self.assertIsNone(service.haar_cascade)
        self.assertEqual(service.min_detection_size, (30, 30))
        self.assertEqual(service.max_detection_size, (300, 300))

    def test_from_config(self):
        config = SystemConfig(detection_scale_factor=1.3, detection_min_neighbors=5,
                              detection_min_size=40, detection_max_size=200)

        service = CatDetectionImageService.from_config(config)

        self.assertEqual(service.scale_factor, 1.3)
        self.assertEqual(service.min_neighbors, 5)
        self.assertEqual(service.min_detection_size, (40, 40))
        self.assertEqual(service.max_detection_size, (200, 200))

    def test_no_detections_means_no_cat(self):
        self.assertFalse(self.service.image_contains_cat(self.frame, 50.0))

    def test_centered_detection_above_threshold(self):
        self.service.haar_cascade.detectMultiScale.return_value = [(220, 140, 200, 200)]

        self.assertTrue(self.service.image_contains_cat(self.frame, 50.0))

    def test_detection_below_threshold(self):
        self.service.haar_cascade.detectMultiScale.return_value = [(220, 140, 200, 200)]

        self.assertFalse(self.service.image_contains_cat(self.frame, 95.0))

    def test_confidence_is_percentage(self):
        centered_large = self.service._confidence((170, 90, 300, 300), self.frame.shape)
        corner_small = self.service._confidence((0, 0, 30, 30), self.frame.shape)

        self.assertAlmostEqual(centered_large, 100.0, places=0)
        self.assertGreaterEqual(corner_small, 60.0)
        self.assertLess(corner_small, centered_large)

    def test_grayscale_frame_accepted(self):
        gray = np.zeros((480, 640), dtype=np.uint8)
        self.assertFalse(self.service.image_contains_cat(gray, 50.0))

    def test_preprocess_produces_grayscale(self):
        processed = self.service._preprocess_frame(self.frame)
        self.assertEqual(processed.shape, (480, 640))

    def test_empty_image_unavailable(self):
        with self.assertRaises(DetectionUnavailableError):
            self.service.image_contains_cat(np.zeros((0, 0, 3), dtype=np.uint8), 50.0)

        with self.assertRaises(DetectionUnavailableError):
            self.service.image_contains_cat(None, 50.0)

    def test_opencv_error_unavailable(self):
        self.service.haar_cascade.detectMultiScale.side_effect = cv2.error("cascade failure")

        with self.assertRaises(DetectionUnavailableError):
            self.service.image_contains_cat(self.frame, 50.0)

    def test_missing_cascade_file_unavailable(self):
        service = CatDetectionImageService(cascade_path="/nonexistent/cascade.xml")

        with self.assertRaises(DetectionUnavailableError):
            service.image_contains_cat(self.frame, 50.0)

    def test_load_bundled_cascade(self):
        service = CatDetectionImageService()
        service.load_model()
        self.assertIsNotNone(service.haar_cascade)
        self.assertFalse(service.image_contains_cat(self.frame, 50.0))


class TestImageFiles(unittest.TestCase):
    """Classifying images given as file paths."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.image_path = os.path.join(self.test_dir, "frame.png")
        Image.new("RGB", (64, 48), color=(10, 20, 30)).save(self.image_path)

        self.service = CatDetectionImageService()
        self.service.haar_cascade = Mock()
        self.service.haar_cascade.detectMultiScale.return_value = []

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_image(self):
        image = load_image(self.image_path)

        self.assertEqual(image.shape, (48, 64, 3))
        self.assertEqual(tuple(image[0, 0]), (10, 20, 30))

    def test_path_is_loaded_before_detection(self):
        self.assertFalse(self.service.image_contains_cat(self.image_path, 50.0))
        self.service.haar_cascade.detectMultiScale.assert_called_once()

    def test_missing_file_unavailable(self):
        with self.assertRaises(DetectionUnavailableError):
            self.service.image_contains_cat(os.path.join(self.test_dir, "missing.png"), 50.0)


class TestFakeImageService(unittest.TestCase):
    """Test cases for FakeImageService."""

    def test_seeded_results_repeat(self):
        first = FakeImageService(seed=7)
        second = FakeImageService(seed=7)

        results = [first.image_contains_cat(None, 50.0) for _ in range(20)]

        self.assertEqual(results, [second.image_contains_cat(None, 50.0) for _ in range(20)])
        self.assertTrue(all(isinstance(r, bool) for r in results))


if __name__ == '__main__':
    unittest.main()
