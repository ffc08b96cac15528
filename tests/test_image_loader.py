import io

import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from annolabel.image_loader import (
    ImageLoader,
    ImageProperty,
    image_properties,
    load_image,
)


def make_png(width=4, height=3, text=None):
    image = Image.new("RGB", (width, height), (10, 20, 30))
    info = PngInfo()
    for key, value in (text or {}).items():
        info.add_text(key, value)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", pnginfo=info)
    return buffer.getvalue()


class MemoryFiles:
    def __init__(self, files):
        self.files = files

    def load_file(self, filename):
        try:
            return self.files[filename]
        except KeyError:
            raise FileNotFoundError(filename) from None


def test_load_png_properties():
    data = make_png(4, 3, {"Comment": "hello"})
    result = load_image("a.png", MemoryFiles({"a.png": data}))
    assert result.image.size == (4, 3)
    assert result.error_text == ""
    assert result.properties[:3] == [
        ImageProperty("Size", f"{len(data)} bytes"),
        ImageProperty("Width", "4 pix"),
        ImageProperty("Height", "3 pix"),
    ]
    assert ImageProperty("Comment", "hello") in result.properties


def test_image_properties_without_image():
    assert image_properties(None, b"abc") == [
        ImageProperty("Size", "3 bytes"),
        ImageProperty("Width", "0 pix"),
        ImageProperty("Height", "0 pix"),
    ]


def test_undecodable_data_skips_converter():
    calls = []
    result = load_image(
        "bad.png",
        MemoryFiles({"bad.png": b"not an image"}),
        lambda image, name, fs: calls.append(name),
    )
    assert result.image is None
    assert calls == []
    assert result.properties[1] == ImageProperty("Width", "0 pix")


def test_missing_file_has_no_properties():
    result = load_image("gone.png", MemoryFiles({}))
    assert result.image is None
    assert result.properties == []


def test_converter_result_and_error():
    data = make_png(2, 2)
    files = MemoryFiles({"x.png": data})
    converted = load_image("x.png", files, lambda image, name, fs: image.convert("L"))
    assert converted.image.mode == "L"

    def failing(image, name, fs):
        raise ValueError(f"cannot convert {name}")

    failed = load_image("x.png", files, failing)
    assert failed.error_text == "cannot convert x.png"
    assert failed.image is None


def test_background_loader_reports_result():
    finished = []
    loader = ImageLoader(on_finished=finished.append)
    loader.start_loading("a.png", MemoryFiles({"a.png": make_png(5, 6)}))
    result = loader.wait(timeout=10)
    assert result.filename == "a.png"
    assert result.image.size == (5, 6)
    assert finished == [result]
    assert loader.result is result


def test_wait_before_start_raises():
    with pytest.raises(RuntimeError):
        ImageLoader().wait()