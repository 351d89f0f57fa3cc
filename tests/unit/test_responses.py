"""Unit tests for response construction."""

import json

from images_binding.core.exceptions import UnsupportedInputError
from images_binding.core.models import ImageInfo
from images_binding.core.responses import (
    ERROR_HEADER,
    error_response,
    image_response,
    json_response,
    response_for_error,
)


def test_error_response_shape():
    response = error_response(400, 9523, "ERROR: Expected image in request")
    assert response.status_code == 400
    assert response.body == b"ERROR 9523: ERROR: Expected image in request"
    assert response.media_type == "text/plain"
    assert response.headers == {"cf-images-binding": "err=9523"}
    assert response.is_error


def test_response_for_error_uses_exception_fields():
    response = response_for_error(UnsupportedInputError())
    assert response.status_code == 415
    assert response.body == b"ERROR 9520: ERROR: Unsupported image type"
    assert response.headers[ERROR_HEADER] == "err=9520"


def test_image_response():
    response = image_response(b"bytes", "image/png")
    assert response.status_code == 200
    assert response.body == b"bytes"
    assert response.media_type == "image/png"
    assert not response.is_error


def test_json_response_omits_missing_fields():
    response = json_response(ImageInfo(format="image/svg+xml"))
    assert response.media_type == "application/json"
    assert json.loads(response.body) == {"format": "image/svg+xml"}


def test_json_response_raster():
    info = ImageInfo(format="image/png", file_size=300, width=10, height=20)
    assert json.loads(json_response(info).body) == {
        "format": "image/png",
        "fileSize": 300,
        "width": 10,
        "height": 20,
    }
