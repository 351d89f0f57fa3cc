"""Unit tests for the Pillow engine."""

import asyncio
import io

import pytest
from PIL import Image

from images_binding.core.config import BindingSettings
from images_binding.core.exceptions import ImageEngineError, UnsupportedInputError
from images_binding.core.models import FitPolicy, OutputCodec, Resize, Rotate
from images_binding.engines.pillow_engine import PillowImageEngine
from images_binding.testing.fakes import create_test_image, create_test_svg


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def engine():
    return PillowImageEngine(BindingSettings())


def decode(data):
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


class TestMetadata:
    """Tests for PillowImageHandle.metadata."""

    @pytest.mark.parametrize(
        "pillow_format, tag", [("JPEG", "jpeg"), ("PNG", "png"), ("GIF", "gif"), ("WEBP", "webp")]
    )
    def test_raster_metadata(self, engine, pillow_format, tag):
        data = create_test_image(100, 50, format=pillow_format)

        metadata = run(engine.open(data).metadata())

        assert metadata.format == tag
        assert metadata.size == len(data)
        assert (metadata.width, metadata.height) == (100, 50)

    def test_svg_metadata(self, engine):
        data = create_test_svg()

        metadata = run(engine.open(data).metadata())

        assert metadata.format == "svg"
        assert metadata.size == len(data)
        assert metadata.width is None

    def test_unsupported_but_decodable_format_is_reported(self, engine):
        data = create_test_image(10, 10, format="BMP")
        assert run(engine.open(data).metadata()).format == "bmp"

    def test_garbage_is_unsupported_input(self, engine):
        with pytest.raises(UnsupportedInputError):
            run(engine.open(b"definitely not an image").metadata())

    def test_handle_is_consumed_once(self, engine):
        handle = engine.open(create_test_image(10, 10))
        run(handle.metadata())
        with pytest.raises(ImageEngineError, match="already consumed"):
            run(handle.encode(OutputCodec.JPEG))


class TestPendingOperations:
    """Tests for operation queueing."""

    def test_operations_are_queued_not_applied(self, engine):
        handle = engine.open(b"not decoded yet")
        handle.rotate(90)
        handle.resize(50, None)

        assert handle.pending_operations == [
            Rotate(degrees=90),
            Resize(width=50, fit=FitPolicy.CONTAIN),
        ]


class TestEncode:
    """Tests for PillowImageHandle.encode."""

    def test_width_only_resize_preserves_aspect_ratio(self, engine):
        handle = engine.open(create_test_image(100, 50))
        handle.resize(50, None)

        output = decode(run(handle.encode(OutputCodec.JPEG)))

        assert output.format == "JPEG"
        assert output.size == (50, 25)

    def test_box_resize_pads_to_exact_size(self, engine):
        handle = engine.open(create_test_image(100, 50, format="PNG"))
        handle.resize(40, 40)

        output = decode(run(handle.encode(OutputCodec.PNG)))

        assert output.size == (40, 40)
        assert output.getpixel((20, 0))[:3] == (0, 0, 0)

    def test_sequential_resizes_compound(self, engine):
        handle = engine.open(create_test_image(100, 50, format="PNG"))
        handle.resize(50, None)
        handle.resize(None, 10)

        output = decode(run(handle.encode(OutputCodec.PNG)))

        assert output.size == (20, 10)

    def test_rotate_then_resize(self, engine):
        handle = engine.open(create_test_image(100, 50, format="PNG"))
        handle.rotate(90)
        handle.resize(None, 50)

        output = decode(run(handle.encode(OutputCodec.PNG)))

        assert output.size == (25, 50)

    def test_no_operations_reencodes(self, engine):
        data = create_test_image(30, 20, format="PNG")

        output = decode(run(engine.open(data).encode(OutputCodec.WEBP)))

        assert output.format == "WEBP"
        assert output.size == (30, 20)

    def test_rgba_to_jpeg(self, engine):
        data = create_test_image(20, 20, format="PNG", mode="RGBA")

        output = decode(run(engine.open(data).encode(OutputCodec.JPEG)))

        assert output.mode == "RGB"

    def test_gif_input_encodes_first_frame(self, engine):
        data = create_test_image(20, 10, format="GIF")

        output = decode(run(engine.open(data).encode(OutputCodec.PNG)))

        assert output.format == "PNG"
        assert output.size == (20, 10)

    def test_svg_cannot_be_rasterized(self, engine):
        with pytest.raises(UnsupportedInputError):
            run(engine.open(create_test_svg()).encode(OutputCodec.PNG))

    def test_garbage_is_unsupported_input(self, engine):
        with pytest.raises(UnsupportedInputError):
            run(engine.open(b"\x00\x01garbage").encode(OutputCodec.JPEG))

    def test_oversized_resize_is_unsupported_input(self, engine):
        handle = engine.open(create_test_image(100, 50))
        handle.resize(200000, 200000)

        with pytest.raises(UnsupportedInputError):
            run(handle.encode(OutputCodec.JPEG))

    def test_jpeg_quality_comes_from_settings(self):
        data = create_test_image(64, 64)
        low = run(PillowImageEngine(BindingSettings(jpeg_quality=5)).open(data).encode(OutputCodec.JPEG))
        high = run(PillowImageEngine(BindingSettings(jpeg_quality=95)).open(data).encode(OutputCodec.JPEG))
        assert len(low) < len(high)
