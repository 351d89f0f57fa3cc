"""Pillow helpers used by the Pillow engine."""

from typing import Optional, Tuple, Union

from PIL import Image, ImageOps

from .models import FitPolicy, Resize, Rotate

SVG_SNIFF_BYTES = 1024

# Pillow format names that differ from the tags callers expect.
FORMAT_ALIASES = {"mpo": "jpeg"}

Fill = Union[Tuple[int, int, int], Tuple[int, int, int, int]]


def looks_like_svg(data: bytes) -> bool:
    """
    Sniff whether raw bytes are an SVG document.

    Args:
        data: Raw uploaded bytes

    Returns:
        True if the document starts with an XML prologue or comment and
        contains an ``<svg`` element near the top, or starts with one.
    """
    head = data[:SVG_SNIFF_BYTES].lstrip(b"\xef\xbb\xbf").lstrip()
    if head.startswith(b"<svg"):
        return True
    return head.startswith((b"<?xml", b"<!--", b"<!DOCTYPE svg")) and b"<svg" in head


def format_tag(pillow_format: Optional[str]) -> Optional[str]:
    """Lower-case a Pillow format name into an engine format tag."""
    if not pillow_format:
        return None
    tag = pillow_format.lower()
    return FORMAT_ALIASES.get(tag, tag)


def has_alpha(img: "Image.Image") -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    )


def normalize_mode(img: "Image.Image") -> "Image.Image":
    """Convert to RGB or RGBA so solid fills and resampling behave."""
    target = "RGBA" if has_alpha(img) else "RGB"
    if img.mode == target:
        return img
    return img.convert(target)


def fill_for(img: "Image.Image") -> Fill:
    """Opaque black in the image's mode."""
    return (0, 0, 0, 255) if img.mode == "RGBA" else (0, 0, 0)


def rotate_image(img: "Image.Image", degrees: float) -> "Image.Image":
    """
    Rotate clockwise by ``degrees``.

    Right angles are lossless transposes. Other angles grow the canvas to
    hold the whole rotated image and fill the corners with opaque black.
    """
    turn = degrees % 360
    if turn == 0:
        return img
    if turn == 90:
        return img.transpose(Image.Transpose.ROTATE_270)
    if turn == 180:
        return img.transpose(Image.Transpose.ROTATE_180)
    if turn == 270:
        return img.transpose(Image.Transpose.ROTATE_90)

    img = normalize_mode(img)
    return img.rotate(
        -degrees,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=fill_for(img),
    )


def contain_size(
    size: Tuple[int, int], width: Optional[int], height: Optional[int]
) -> Tuple[int, int]:
    """
    Infer the missing dimension of a resize from the source aspect ratio.

    Args:
        size: Source (width, height)
        width: Requested width or None
        height: Requested height or None

    Returns:
        The target (width, height), never smaller than 1x1
    """
    src_width, src_height = size
    if width is not None and height is not None:
        return width, height
    if width is not None:
        return width, max(1, round(src_height * width / src_width))
    if height is not None:
        return max(1, round(src_width * height / src_height)), height
    return size


def check_pixel_budget(size: Tuple[int, int]) -> None:
    """
    Refuse targets larger than Pillow would decode.

    Raises:
        Image.DecompressionBombError: If ``size`` exceeds ``Image.MAX_IMAGE_PIXELS``
    """
    limit = Image.MAX_IMAGE_PIXELS
    if limit is not None and size[0] * size[1] > limit:
        raise Image.DecompressionBombError(
            f"Resize target {size[0]}x{size[1]} exceeds limit of {limit} pixels"
        )


def resize_image(
    img: "Image.Image",
    width: Optional[int],
    height: Optional[int],
    fit: FitPolicy = FitPolicy.CONTAIN,
) -> "Image.Image":
    """
    Resize with "contain" semantics.

    With both dimensions the image is scaled to fit inside the box and
    letterboxed to exactly ``width`` x ``height``. With one dimension the
    other follows the aspect ratio, so no padding is needed.
    """
    if fit is not FitPolicy.CONTAIN:
        raise ValueError(f"Unknown fit policy: {fit}")

    target = contain_size(img.size, width, height)
    check_pixel_budget(target)
    if target == img.size:
        return img

    img = normalize_mode(img)
    if width is not None and height is not None:
        return ImageOps.pad(
            img, target, method=Image.Resampling.LANCZOS, color=fill_for(img)
        )
    return img.resize(target, Image.Resampling.LANCZOS)


def apply_operation(img: "Image.Image", operation: Union[Resize, Rotate]) -> "Image.Image":
    """
    Apply one queued operation to an image.

    Raises:
        ValueError: If the operation type is unknown
    """
    if isinstance(operation, Rotate):
        return rotate_image(img, operation.degrees)
    elif isinstance(operation, Resize):
        return resize_image(img, operation.width, operation.height, operation.fit)
    else:
        raise ValueError(f"Unknown operation: {operation!r}")


def prepare_for_codec(img: "Image.Image", pillow_format: str) -> "Image.Image":
    """
    Convert an image to a mode the target encoder accepts.

    JPEG has no alpha channel, so transparent pixels are flattened onto
    black. WebP and AVIF take RGB or RGBA. PNG accepts anything Pillow opens.
    """
    if pillow_format == "JPEG":
        if img.mode in ("RGB", "L", "CMYK"):
            return img
        if not has_alpha(img):
            return img.convert("RGB")
        rgba = img.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, (0, 0, 0))
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        return flattened
    if pillow_format in ("WEBP", "AVIF"):
        return normalize_mode(img)
    return img
