import numpy as np
import pytest
from PIL import Image

from annolabel.image_model import ImageModel, slider_to_value, value_to_slider


def _bgr_image():
    image = np.zeros((2, 3, 3), dtype=np.uint8)
    image[..., 0] = 10  # blue
    image[..., 1] = 20  # green
    image[..., 2] = 30  # red
    image[1, 2] = (1, 2, 3)
    return image


def test_load_sets_loaded_and_builds_rgb_pixmap():
    model = ImageModel()
    image = _bgr_image()
    model.load(image)
    assert model.loaded is True
    assert model.pixmap.shape == (2, 3, 3)
    assert model.pixmap.dtype == np.uint8
    np.testing.assert_array_equal(model.pixmap, image[..., ::-1])


def test_single_channel_image_shows_as_gray():
    model = ImageModel()
    image = np.arange(6, dtype=np.uint8).reshape(2, 3)
    model.load(image)
    for channel in range(3):
        np.testing.assert_array_equal(model.pixmap[..., channel], image)


def test_uint16_full_range_maps_to_255():
    model = ImageModel()
    model.load(np.full((2, 2), 65535, dtype=np.uint16))
    assert (model.pixmap == 255).all()


def test_float_image_is_not_rescaled():
    model = ImageModel()
    model.load(np.full((1, 1), 1.0, dtype=np.float32))
    assert (model.pixmap == 255).all()


def test_brightness_saturates_pixmap():
    model = ImageModel()
    model.load(_bgr_image())
    model.brightness = 1.0
    assert (model.pixmap == 255).all()


def test_zero_contrast_gives_black():
    model = ImageModel()
    model.load(_bgr_image())
    model.contrast = 0.0
    assert (model.pixmap == 0).all()


def test_zero_gamma_gives_white():
    model = ImageModel()
    model.load(_bgr_image())
    model.gamma = 0.0
    assert (model.pixmap == 255).all()


def test_grayscale_makes_channels_equal():
    model = ImageModel()
    model.load(_bgr_image())
    model.grayscale = True
    assert (model.pixmap[..., 0] == model.pixmap[..., 1]).all()
    assert (model.pixmap[..., 1] == model.pixmap[..., 2]).all()


def test_grayscale_of_white_stays_white():
    model = ImageModel()
    model.load(np.full((2, 2, 3), 255, dtype=np.uint8))
    model.grayscale = True
    assert (model.pixmap == 255).all()


def test_clear_drops_image():
    model = ImageModel()
    model.load(_bgr_image())
    model.clear()
    assert model.loaded is False
    assert model.pixmap is None
    assert model.image is None


def test_empty_image_is_not_loaded():
    model = ImageModel()
    model.load(np.zeros((0, 0, 3), dtype=np.uint8))
    assert model.loaded is False
    assert model.pixmap is None


def test_unsupported_channel_count_raises():
    model = ImageModel()
    with pytest.raises(ValueError):
        model.load(np.zeros((2, 2, 2), dtype=np.uint8))


def test_pil_image_is_stored_in_bgr_order():
    model = ImageModel()
    model.load(Image.new("RGB", (2, 1), (30, 20, 10)))
    assert model.pixel_values(0, 0) == [30.0, 20.0, 10.0]
    np.testing.assert_array_equal(model.pixmap[0, 0], [30, 20, 10])


def test_pixel_values_red_first():
    model = ImageModel()
    model.load(_bgr_image())
    assert model.pixel_values(2, 1) == [3.0, 2.0, 1.0]
    assert model.pixel_values(0, 0) == [30.0, 20.0, 10.0]


def test_pixel_values_single_channel():
    model = ImageModel()
    model.load(np.arange(6, dtype=np.uint8).reshape(2, 3))
    assert model.pixel_values(1, 1) == [4.0]


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_pixel_values_outside_is_empty(x, y):
    model = ImageModel()
    model.load(_bgr_image())
    assert model.pixel_values(x, y) == []


def test_pixel_values_without_image_is_empty():
    assert ImageModel().pixel_values(0, 0) == []


def test_crop_inside():
    model = ImageModel()
    image = _bgr_image()
    model.load(image)
    crop = model.crop(1, 0, 2, 2)
    np.testing.assert_array_equal(crop, image[0:2, 1:3])


def test_crop_partly_outside_is_zero_filled():
    model = ImageModel()
    image = np.arange(1, 7, dtype=np.uint8).reshape(2, 3)
    model.load(image)
    crop = model.crop(-1, -1, 3, 3)
    assert crop.shape == (3, 3)
    assert (crop[0] == 0).all()
    assert (crop[:, 0] == 0).all()
    np.testing.assert_array_equal(crop[1:, 1:], image[0:2, 0:2])


def test_crop_fully_outside_is_zero():
    model = ImageModel()
    model.load(_bgr_image())
    crop = model.crop(10, 10, 2, 2)
    assert crop.shape == (2, 2, 3)
    assert (crop == 0).all()


def test_crop_errors():
    with pytest.raises(ValueError):
        ImageModel().crop(0, 0, 1, 1)
    model = ImageModel()
    model.load(_bgr_image())
    with pytest.raises(ValueError):
        model.crop(0, 0, -1, 1)


def test_reset_default_exr():
    model = ImageModel()
    model.brightness = 0.5
    model.contrast = 2.0
    model.reset_default_exr()
    assert model.brightness == 0.0
    assert model.contrast == 1.0
    assert model.gamma == 0.4


def test_listeners_are_told_only_about_changes():
    model = ImageModel()
    events = []
    model.listeners.append(lambda name, value: events.append(name))
    model.contrast = 1.0
    assert events == []
    model.contrast = 2.0
    assert events == ["contrast", "pixmap"]


def test_setting_changes_rebuild_pixmap():
    model = ImageModel()
    model.load(_bgr_image())
    before = model.pixmap.copy()
    model.brightness = 0.5
    assert (model.pixmap >= before).all()
    assert (model.pixmap > before).any()


def test_slider_to_value_positive_and_negative():
    assert slider_to_value(50, -100, 100, -1.0, 1.0) == 0.5
    assert slider_to_value(-50, -100, 100, -2.0, 2.0) == -1.0
    assert slider_to_value(0, -100, 100, -1.0, 1.0) == 0.0


@pytest.mark.parametrize("ticks", [-100, -40, 0, 30, 100])
def test_slider_round_trip(ticks):
    value = slider_to_value(ticks, -100, 100, -4.0, 4.0)
    assert value_to_slider(value, -100, 100, -4.0, 4.0) == ticks


def test_value_to_slider_truncates():
    assert value_to_slider(0.999, 0, 10, 0.0, 1.0) == 9