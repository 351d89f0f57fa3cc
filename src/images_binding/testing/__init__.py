"""Testing utilities and fakes for the images binding."""

from .fakes import (
    FakeImageEngine,
    FakeImageHandle,
    FakeLogger,
    create_test_image,
    create_test_svg,
)

__all__ = [
    "FakeImageEngine",
    "FakeImageHandle",
    "FakeLogger",
    "create_test_image",
    "create_test_svg",
]
