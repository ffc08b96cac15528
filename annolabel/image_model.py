"""Display model of a background image with brightness, contrast and gamma."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
from PIL import Image

Listener = Callable[[str, Any], None]

# Weights of the blue, green and red channels in a grey value.
_GRAY_WEIGHTS = np.array([0.114, 0.587, 0.299], dtype=np.float32)

_DEFAULT_EXR_GAMMA = 0.4


def _as_array(image: Any) -> np.ndarray:
    """Turn a PIL image or an array into an array with channels in BGR order."""
    if isinstance(image, Image.Image):
        if image.mode in ("L", "I", "I;16", "F"):
            return np.asarray(image)
        return np.asarray(image.convert("RGB"))[..., ::-1].copy()
    return np.asarray(image)


class ImageModel:
    """The loaded background image and the pixmap shown for it.

    Images are arrays of shape ``(rows, cols)`` or ``(rows, cols, channels)``
    with 1, 3 or 4 channels stored in blue, green, red (, alpha) order.
    ``pixmap`` is the display image: an ``uint8`` RGB array, or ``None``
    when there is nothing to show.

    Listeners are called as ``listener(name, value)`` when ``loaded``,
    ``grayscale``, ``brightness``, ``contrast`` or ``gamma`` change, and as
    ``listener("pixmap", pixmap)`` after every rebuild. Changing one of the
    display settings rebuilds the pixmap.
    """

    def __init__(self) -> None:
        self._image: np.ndarray | None = None
        self.pixmap: np.ndarray | None = None
        self._loaded = False
        self._grayscale = False
        self._brightness = 0.0
        self._contrast = 1.0
        self._gamma = 1.0
        self.listeners: list[Listener] = []

    # -- observable properties -------------------------------------------

    def _emit(self, name: str, value: Any) -> None:
        for listener in list(self.listeners):
            listener(name, value)

    def _set(self, name: str, value: Any, rebuild: bool = True) -> None:
        attribute = "_" + name
        if getattr(self, attribute) != value:
            setattr(self, attribute, value)
            self._emit(name, value)
            if rebuild:
                self.rebuild()

    @property
    def image(self) -> np.ndarray | None:
        """The original image as loaded."""
        return self._image

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def grayscale(self) -> bool:
        return self._grayscale

    @grayscale.setter
    def grayscale(self, value: bool) -> None:
        self._set("grayscale", bool(value))

    @property
    def brightness(self) -> float:
        """Added to every normalised value (0 leaves the image unchanged)."""
        return self._brightness

    @brightness.setter
    def brightness(self, value: float) -> None:
        self._set("brightness", float(value))

    @property
    def contrast(self) -> float:
        """Factor for every normalised value (1 leaves the image unchanged)."""
        return self._contrast

    @contrast.setter
    def contrast(self, value: float) -> None:
        self._set("contrast", float(value))

    @property
    def gamma(self) -> float:
        """Exponent applied to normalised values (1 leaves the image unchanged)."""
        return self._gamma

    @gamma.setter
    def gamma(self, value: float) -> None:
        self._set("gamma", float(value))

    # -- loading ---------------------------------------------------------

    def load(self, image: Any) -> None:
        """Take a new image (array or PIL image) and rebuild the pixmap."""
        array = _as_array(image)
        if array.ndim == 3 and array.shape[2] == 1:
            array = array[..., 0]
        if array.ndim not in (2, 3) or (array.ndim == 3 and array.shape[2] not in (3, 4)):
            raise ValueError(f"unsupported image shape {array.shape}")
        self._image = array
        self.pixmap = None
        self.rebuild()
        self._set("loaded", array.size > 0, rebuild=False)

    def clear(self) -> None:
        """Drop the image and the pixmap."""
        self._image = None
        self.pixmap = None
        self._set("loaded", False, rebuild=False)

    @property
    def channels(self) -> int:
        if self._image is None:
            return 0
        return 1 if self._image.ndim == 2 else self._image.shape[2]

    def _max_value(self) -> float:
        assert self._image is not None
        if self._image.dtype == np.uint8:
            return 255.0
        if self._image.dtype == np.uint16:
            return 65535.0
        return 1.0

    def rebuild(self) -> None:
        """Recompute the pixmap from the image and the display settings."""
        self.pixmap = self._build_pixmap()
        self._emit("pixmap", self.pixmap)

    def _build_pixmap(self) -> np.ndarray | None:
        if self._image is None or self._image.size == 0:
            return None

        result = self._image.astype(np.float32)
        if result.ndim == 3:
            result = result[..., :3]
            if self._grayscale:
                result = result @ _GRAY_WEIGHTS

        result = result / np.float32(self._max_value())

        if float(self._gamma).is_integer():
            result = np.power(result, np.float32(self._gamma))
        else:
            result = np.power(np.abs(result), np.float32(self._gamma))

        result = result * np.float32(self._contrast) + np.float32(self._brightness)

        if result.ndim == 2:
            result = np.repeat(result[..., None], 3, axis=2)

        pixels = np.clip(np.rint(result * 255.0), 0, 255).astype(np.uint8)
        return np.ascontiguousarray(pixels[..., ::-1])

    # -- queries ---------------------------------------------------------

    def pixel_values(self, x: int, y: int) -> list[float]:
        """Channel values of the original image at ``(x, y)``, red first.

        Returns an empty list outside the image or for four-channel images.
        """
        if self._image is None:
            return []
        rows, cols = self._image.shape[:2]
        if not (0 <= x < cols and 0 <= y < rows):
            return []
        if self.channels not in (1, 3):
            return []
        pixel = self._image[y, x]
        if self.channels == 1:
            return [float(pixel)]
        return [float(v) for v in pixel[::-1]]

    def crop(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Cut a rectangle out of the image; parts outside it are zero."""
        if self._image is None:
            raise ValueError("no image is loaded")
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")

        shape = (height, width) + self._image.shape[2:]
        result = np.zeros(shape, dtype=self._image.dtype)

        rows, cols = self._image.shape[:2]
        left, top = max(x, 0), max(y, 0)
        right, bottom = min(x + width, cols), min(y + height, rows)
        if right > left and bottom > top:
            result[top - y:bottom - y, left - x:right - x] = self._image[top:bottom, left:right]
        return result

    # -- resets ----------------------------------------------------------

    def reset_brightness(self) -> None:
        self.brightness = 0.0

    def reset_contrast(self) -> None:
        self.contrast = 1.0

    def reset_gamma(self) -> None:
        self.gamma = 1.0

    def reset_default_exr(self) -> None:
        """Settings suited to viewing linear high dynamic range images."""
        self.contrast = 1.0
        self.brightness = 0.0
        self.gamma = _DEFAULT_EXR_GAMMA


def slider_to_value(
    ticks: int, slider_min: int, slider_max: int, spin_min: float, spin_max: float
) -> float:
    """Map slider ticks to a setting value, scaling each side of zero apart."""
    if ticks >= 0:
        return (float(ticks) / slider_max) * spin_max
    return (float(ticks) / slider_min) * spin_min


def value_to_slider(
    value: float, slider_min: int, slider_max: int, spin_min: float, spin_max: float
) -> int:
    """Map a setting value to slider ticks; the inverse of ``slider_to_value``."""
    if value >= 0:
        return int((float(value) / spin_max) * slider_max)
    return int((float(value) / spin_min) * slider_min)