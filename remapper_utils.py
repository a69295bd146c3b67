""" Texture utilities shared by the remapping operations and the CLI. """

import os
from typing import Iterable, List, Optional, Set, Tuple

from remapper_backend.errors import ConfigError, SelectionError
from remapper_backend.image_lib import close_image
from remapper_backend.texture_classes import CHANNEL_ORDER, ChannelMapping

from remapper_settings import SHOW_DETAILS, SPLIT_SUFFIXES


LOG_TYPES: list[str] = ["info", "warn", "error", "skip", "complete"]
# Defines log types printed to the console.

def log(message: str, message_kind: LOG_TYPES = "info") -> None:
# Maps different log types.

    if message == "":
        print("")
        return

    if message_kind not in LOG_TYPES:
        message_kind = "info"

    if message_kind == "info":
        print(f"   {message}")
    elif message_kind == "warn":
        print(f"⚠️ {message}")
    elif message_kind == "error":
        print(f"⛔ {message}")
    elif message_kind == "skip":
        print(f"❌ {message}")
    elif message_kind == "complete":
        print(f"✅ {message}")
    else:
        print(message)  # fallback

    # Print styles:
    # info: 3 whitespaces + message
    # warn: ⚠️ + message
    # error: ⛔ + message
    # skip: ❌ + message
    # complete: ✅ + message


def close_image_files(images: Iterable[Optional[object]]) -> None:
# Safely closes all opened images even if there is an error during image processing.

    processed_ids: Set[int] = set()
    for image in images:
        if image is None:
            continue
        image_id = id(image)
        if image_id in processed_ids:
            continue
        processed_ids.add(image_id)
        try:
            close_image(image) # Function from image_lib
        except (OSError, ValueError):
            pass


def describe_output(path: str, resolution: Optional[Tuple[int, int]] = None) -> str:
# File name for logs; full path and resolution only with SHOW_DETAILS.

    if not SHOW_DETAILS:
        return os.path.basename(path)
    if resolution:
        width, height = resolution
        return f"{path} ({width}x{height})"
    return path


def make_output_dir(source_path: str, *, output_folder_name: Optional[str]) -> str:
# Creates/returns the folder for generated files: the source's own folder, or a subfolder of it.

    base_directory = os.path.dirname(os.path.abspath(source_path))

    output_folder_name = (output_folder_name or "").strip()
    output_directory = os.path.join(base_directory, output_folder_name) if output_folder_name else base_directory
    os.makedirs(output_directory, exist_ok=True)
    return output_directory


def select_channel_paths(paths: List[str]) -> ChannelMapping:
# Assigns exactly four picked files to the R/G/B/A roles by the "_R", "_G", "_B", "_A" ending of their names.
# E.g., Rock_R.tga > R, Rock_A.png > A

    if len(paths) != len(CHANNEL_ORDER):
        raise SelectionError(f"Four images should be selected, got {len(paths)}.")

    mapping: ChannelMapping = {"R": None, "G": None, "B": None, "A": None}
    channel_labels = {"R": "Red", "G": "Green", "B": "Blue", "A": "Alpha"}

    for channel in CHANNEL_ORDER:
        role_suffix = SPLIT_SUFFIXES[channel]
        matched_path = next((path for path in paths if source_stem(path).endswith(role_suffix)), None)
        if matched_path is None:
            raise SelectionError(f"Should have a {channel_labels[channel]} Channel Image (name ending with '{role_suffix}').")
        mapping[channel] = matched_path
    return mapping


def source_stem(path: str) -> str:
# File name without folder and extension, e.g., "textures/Rock_Multi.png" > "Rock_Multi".
    filename, _ = os.path.splitext(os.path.basename(path))
    return filename


def validate_safe_folder_name(raw_folder_name: Optional[str]) -> None:
# Validates that the custom folder name doesn't include unsupported characters.

    folder_name: str = (raw_folder_name or "")
    if folder_name.strip() == "":
        return

    if any(invalid_character in folder_name for invalid_character in '\\/:*?"<>|'):
        raise ConfigError(f"Invalid folder name '{raw_folder_name}'. It cannot contain \\ / : * ? \" < > |")
    return
