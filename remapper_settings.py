
""" Channel Remapper settings. """

import json
import os
from typing import Dict, Tuple


def _as_bool(v) -> bool:
# Converts .json input (bool/int/str/None) to a real bool;
# Avoids the case where a non-empty string like "False" is treated as True.

    if isinstance(v, bool): return v
    if isinstance(v, str):
        input_str = v.strip().lower()
        if input_str == "": return False
        return input_str in ("1","true","yes","on")
    return bool(v)


def _load_config(config_path: str) -> dict:
# Missing config.json falls back to defaults, e.g., when only the modules were installed.
    if not os.path.isfile(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)



#                                           === Loading JSON file ===

_config_path = os.path.join(os.path.dirname(__file__), "config.json")
_config_data = _load_config(_config_path)


# Assigning config values:
FILE_TYPE: str = _config_data.get("FILE_TYPE", "tga") # File type of every generated texture.
OUTPUT_FOLDER_NAME: str = _config_data.get("OUTPUT_FOLDER_NAME", "") # If provided, places generated textures into a subfolder of the source texture's folder.
JOIN_CHANNEL_SOURCE: str = _config_data.get("JOIN_CHANNEL_SOURCE", "matching") # "matching": each join input gives its same-named channel; "first": each gives its red channel (greyscale from split-multi).

SHOW_DETAILS: bool = _as_bool(_config_data.get("SHOW_DETAILS", False)) # Shows details like exact resolution and full paths when printing logs.




#                                           === Constants ===

ALLOWED_FILE_TYPES: Tuple[str, ...] = ("png", "tga") # Output types; both keep the alpha channel.
INPUT_FILE_TYPES: Tuple[str, ...] = ("png", "tga") # File types offered by the file dialog.
JOIN_CHANNEL_SOURCES: Tuple[str, ...] = ("matching", "first")

SPLIT_SUFFIXES: Dict[str, str] = {"R": "_R", "G": "_G", "B": "_B", "A": "_A"}
JOIN_SUFFIX: str = "GBA" # Appended to the red input's name, so "Rock_R" becomes "Rock_RGBA".
FIXED_SUFFIX: str = "_Fixed"
