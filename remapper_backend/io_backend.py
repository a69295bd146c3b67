""" Input/output backend: runtime context, output paths, saving, and the interactive prompt and file dialog. """
#  Keeps the remapping operations free of console and GUI calls.

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from remapper_backend.errors import ConfigError, InvalidCommand, SelectionError
from remapper_backend.image_lib import ImageObject, save_image as save_image_file

from remapper_settings import (ALLOWED_FILE_TYPES, FILE_TYPE, INPUT_FILE_TYPES, JOIN_CHANNEL_SOURCE,
                               JOIN_CHANNEL_SOURCES, OUTPUT_FOLDER_NAME)
from remapper_utils import make_output_dir, source_stem, validate_safe_folder_name


@dataclass
class RemapContext:
    export_extension: str = "" # Validated output file extension, without the dot.
    output_folder_name: str = "" # Subfolder of the source folder for generated files; empty writes next to the source.
    join_channel_source: str = "matching" # Which channel join-multi reads from each input: "matching" or "first".


COMMANDS: Tuple[Tuple[str, str], ...] = (
    ("fix-normal", "Fix Normal"),
    ("split-multi", "Split Multi"),
    ("join-multi", "Join Multi"),
)  # Menu order of the interactive mode; the first entry is the default.




#                                     === Context ===


def create_context(file_type: Optional[str] = None, output_folder_name: Optional[str] = None, join_channel_source: Optional[str] = None) -> RemapContext:
# Builds a validated context; arguments override config values when given.

    context = RemapContext()
    context_validate_export_extension(context, file_type if file_type is not None else FILE_TYPE)

    folder_name: str = output_folder_name if output_folder_name is not None else OUTPUT_FOLDER_NAME
    validate_safe_folder_name(folder_name)
    context.output_folder_name = (folder_name or "").strip()

    channel_source: str = (join_channel_source if join_channel_source is not None else JOIN_CHANNEL_SOURCE) or ""
    channel_source = channel_source.strip().lower()
    if channel_source not in JOIN_CHANNEL_SOURCES:
        raise ConfigError(f"Invalid JOIN_CHANNEL_SOURCE '{channel_source}'. Supported: {', '.join(JOIN_CHANNEL_SOURCES)}")
    context.join_channel_source = channel_source
    return context


def context_validate_export_extension(context: Optional["RemapContext"], file_type: str) -> None:
# Validates and sets in context the extension input by the user in config or CLI.
# Sets the extension type, without the dot.

    allowed_file_types: set[str] = set(ALLOWED_FILE_TYPES)
    file_extension: str = (file_type or "").strip().lower().lstrip(".")

    if not file_extension or file_extension not in allowed_file_types:
        sorted_allowed_file_types = ", ".join(sorted(allowed_file_types))
        raise ConfigError(f"Invalid FILE_TYPE '{file_type}'. Supported: {sorted_allowed_file_types}")

    if context is not None:
        context.export_extension = file_extension
    return




#                                     === Output ===


def resolve_output_path(source_path: str, suffix: str, context: "RemapContext") -> str:
# Output path for a file generated from source_path, e.g., "maps/Rock.png" + "_R" > "maps/Rock_R.tga".

    output_directory: str = make_output_dir(source_path, output_folder_name=context.output_folder_name)
    return os.path.join(output_directory, f"{source_stem(source_path)}{suffix}.{context.export_extension}")


def save_generated_texture(image: ImageObject, output_path: str, context: "RemapContext") -> str:
# Saves with the context's format regardless of the path's extension. Raises EncodeError on failure.

    save_image_file(image, output_path, context.export_extension)
    return output_path




#                                     === Interactive ===


def ask_command(input_function: Optional[Callable[[str], str]] = None) -> str:
# Prints the numbered menu and returns the chosen command name.

    input_function = input_function or input

    print("Choose a command (type a number and press enter):")
    for number, (_, label) in enumerate(COMMANDS, start=1):
        print(f"   {number} - {label}")

    answer: str = (input_function(f"Command [1-{len(COMMANDS)}, default 1]: ") or "").strip()
    if answer == "":
        return COMMANDS[0][0]
    if answer.isdigit() and 1 <= int(answer) <= len(COMMANDS):
        return COMMANDS[int(answer) - 1][0]
    raise InvalidCommand(f"Invalid Command '{answer}'.")


def pick_files(title: str, multiple: bool = False, file_types: Sequence[str] = INPUT_FILE_TYPES) -> List[str]:
# Opens the native file dialog. Cancelling raises SelectionError.

    import tkinter
    from tkinter import filedialog

    filetypes = [("Image", " ".join(f"*.{file_type}" for file_type in file_types))]

    root = tkinter.Tk()
    root.withdraw()
    try:
        if multiple:
            selected = list(filedialog.askopenfilenames(title=title, filetypes=filetypes))
        else:
            single = filedialog.askopenfilename(title=title, filetypes=filetypes)
            selected = [single] if single else []
    finally:
        root.destroy()

    if not selected:
        raise SelectionError(f"No file selected ({title}).")
    return selected
