""" Image processing backend. Currently implemented using Pillow (PIL). Sources are scaled to 8bit and normalized to RGBA."""



#                                           === Backend ===

from array import array
from typing import Sequence, Tuple, TypeAlias

from PIL import Image as _PIL
from PIL.Image import Image as PILImage

from remapper_backend.errors import DecodeError, EncodeError

ImageObject: TypeAlias = PILImage

RGBA_MODE: str = "RGBA"
SIXTEEN_BIT_MODES: Tuple[str, ...] = ("I", "I;16", "I;16L", "I;16B")


def close_image(image: object) -> None:
    close = getattr(image, "close", None)
    if callable(close):
        close()


def get_channel(image: ImageObject, index: int) -> ImageObject:
# Extracts a single channel by its position in the pixel tuple (0=R ... 3=A).
    return image.getchannel(index)


def get_size(image: ImageObject) -> Tuple[int, int]:
# Returns the image size as (width, height)
    return image.size


def merge_channels(channels: Sequence[ImageObject]) -> ImageObject:
# Merge four single channels into an RGBA image.
    return _PIL.merge(RGBA_MODE, tuple(channels))


def new_image_grayscale(size: Tuple[int, int], fill: int) -> ImageObject:
# Create a new single channel image filled with one value.
    return _PIL.new("L", size, fill)


def open_image_rgba(path: str) -> ImageObject:
# Decodes the file fully and normalizes it to RGBA.
# Greyscale "L" becomes (v, v, v, 255) and "RGB" gains an opaque alpha.
# 16bit greyscale (read as "I;16" or "I") is scaled down to 8bit first; a plain convert would clip it to 255.

    try:
        with _PIL.open(path) as source:
            source.load()
            if source.mode == RGBA_MODE:
                return source.copy()
            if source.mode in SIXTEEN_BIT_MODES:
                return _16_to_8bit(source).convert(RGBA_MODE)
            return source.convert(RGBA_MODE)
    except (OSError, ValueError) as error:
        # UnidentifiedImageError and FileNotFoundError are both OSError.
        raise DecodeError(path, str(error)) from error


def save_image(image: ImageObject, path: str, file_extension: str) -> None:
    try:
        image.save(path, format=_pillow_format(file_extension))
    except (OSError, ValueError, KeyError) as error:
        raise EncodeError(path, str(error)) from error


def _pillow_format(file_extension: str) -> str:
# Pillow's writer name for an extension, e.g., "tga" > "TGA".
    return file_extension.lstrip(".").upper()




#                                           === Utils ===


def _16_to_8bit(image: ImageObject) -> ImageObject:
# Scales down 16bit range to a 8bit, so values are properly maintained instead of being clipped.

# Preparing the image:
    if image.mode == "I":
        img16 = image.convert("I;16")
    elif image.mode in ("I;16", "I;16L", "I;16B"):
        img16 = image if image.mode == "I;16" else image.convert("I;16")
    # Normalizes the image type to 16bit LE.
    else:
        return image.convert("L")
    # If the image is just 8bit grayscale, passes it though.

    raw = img16.tobytes("raw", "I;16")  # LE 16bit
    data16 = array("H")
    data16.frombytes(raw)

# Scaling:
    data8 = bytearray((v >> 8) & 0xFF for v in data16)
    return _PIL.frombytes("L", img16.size, bytes(data8))
