"""Loading images through a filesystem, optionally in a background thread."""

from __future__ import annotations

import io
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from PIL import Image


class FileSource(Protocol):
    """Anything that can read a file's bytes by name."""

    def load_file(self, filename: str) -> bytes: ...


Converter = Callable[[Any, str, FileSource], Any]


@dataclass(frozen=True)
class ImageProperty:
    """One name/value line describing a loaded image."""

    name: str
    value: str


@dataclass
class LoadedImage:
    """Outcome of loading one image file."""

    filename: str
    image: Image.Image | None = None
    error_text: str = ""
    properties: list[ImageProperty] = field(default_factory=list)


def image_properties(image: Image.Image | None, data: bytes) -> list[ImageProperty]:
    """Size, width and height of an image followed by its text entries."""
    width, height = image.size if image is not None else (0, 0)
    props = [
        ImageProperty("Size", f"{len(data)} bytes"),
        ImageProperty("Width", f"{width} pix"),
        ImageProperty("Height", f"{height} pix"),
    ]
    if image is not None:
        props += [ImageProperty(k, v) for k, v in image.info.items() if isinstance(v, str)]
    return props


def load_image(
    filename: str,
    filesystem: FileSource,
    converter: Converter | None = None,
) -> LoadedImage:
    """Read and decode ``filename``, then pass it through ``converter``.

    An unreadable file gives no image and no properties. The converter is
    called as ``converter(image, filename, filesystem)`` unless decoding
    failed; a ``ValueError`` or ``OSError`` it raises becomes the error text.
    """
    result = LoadedImage(filename)
    try:
        data = filesystem.load_file(filename)
    except OSError:
        data = b""

    image_ok = True
    if data:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except OSError:
            image = None
        result.image = image
        image_ok = image is not None
        result.properties = image_properties(image, data)

    if converter is not None and image_ok:
        try:
            result.image = converter(result.image, filename, filesystem)
        except (ValueError, OSError) as error:
            result.error_text = str(error)
            result.image = None

    return result


class ImageLoader:
    """Loads one image at a time in a background thread.

    ``on_finished`` is called with the ``LoadedImage`` from the loading
    thread once it is done.
    """

    def __init__(self, on_finished: Callable[[LoadedImage], None] | None = None) -> None:
        self.on_finished = on_finished
        self.filename = ""
        self.result: LoadedImage | None = None
        self._thread: threading.Thread | None = None
        self._error: BaseException | None = None

    def start_loading(
        self,
        filename: str,
        filesystem: FileSource,
        converter: Converter | None = None,
    ) -> None:
        """Start loading ``filename`` in a new thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("a load is already running")
        self.filename = filename
        self.result = None
        self._error = None
        self._thread = threading.Thread(
            target=self._run, args=(filename, filesystem, converter), daemon=True
        )
        self._thread.start()

    def _run(self, filename: str, filesystem: FileSource, converter: Converter | None) -> None:
        try:
            self.result = load_image(filename, filesystem, converter)
        except BaseException as error:  # re-raised by wait()
            self._error = error
            return
        if self.on_finished is not None:
            self.on_finished(self.result)

    def wait(self) -> LoadedImage:
        """Block until the load finishes and return its result."""
        if self._thread is None:
            raise RuntimeError("no load was started")
        self._thread.join()
        if self._error is not None:
            raise self._error
        assert self.result is not None
        return self.result