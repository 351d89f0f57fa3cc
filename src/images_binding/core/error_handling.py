# src/images_binding/core/error_handling.py

import functools
from contextlib import contextmanager

from PIL import Image

from .exceptions import ImageEngineError, ImagesBindingError, UnsupportedInputError


def with_error_handling(func):
    """
    A decorator translating engine failures into binding errors.

    Binding errors pass through untouched; anything else becomes
    ImageEngineError chained to the original exception. Logging happens
    once, where the orchestrator turns the error into a response.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ImagesBindingError:
            raise
        except Exception as e:
            raise ImageEngineError(f"ERROR: Image engine failure in {func.__name__}") from e
    return wrapper


@contextmanager
def decoding_errors():
    """
    Context manager for the decode and resample steps of an engine call.

    Decoders report corrupt or truncated input as OSError, and input or
    resize targets past Pillow's pixel limit as a decompression bomb error;
    all of them mean the upload is not an image this engine supports.
    """
    try:
        yield
    except (OSError, Image.DecompressionBombError) as e:
        raise UnsupportedInputError() from e
