"""Utility functions for the security monitor."""

import os

import numpy as np
from PIL import Image


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def load_image(image_path: str) -> np.ndarray:
    """Read an image file into an RGB numpy array."""
    with Image.open(image_path) as image:
        return np.asarray(image.convert('RGB'))
