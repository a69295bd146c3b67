""" Splits, joins and reorders texture channels: multi maps and normal maps. """

import argparse
import sys
import time
from typing import Callable, Dict, List, Optional, Sequence

from remapper_backend.errors import ConfigError, DimensionMismatchError, RemapError
from remapper_backend.image_lib import (ImageObject, get_channel, get_size, merge_channels, new_image_grayscale, open_image_rgba)
from remapper_backend.io_backend import (COMMANDS, RemapContext, ask_command, create_context, pick_files,
                                         resolve_output_path, save_generated_texture)
from remapper_backend.texture_classes import CHANNEL_ORDER, ChannelMapping, RemapResult

from remapper_settings import ALLOWED_FILE_TYPES, FIXED_SUFFIX, JOIN_CHANNEL_SOURCES, JOIN_SUFFIX, SPLIT_SUFFIXES

from remapper_utils import close_image_files, describe_output, log, select_channel_paths




#                                           === Channel transforms ===
# In-memory only; images are RGBA as returned by open_image_rgba.


def split_to_greyscale(image: ImageObject) -> List[ImageObject]:
# One image per channel in R, G, B, A order: every pixel becomes (s, s, s, 255), s = that channel's value.

    opaque_alpha: ImageObject = new_image_grayscale(get_size(image), 255)
    greyscale_images: List[ImageObject] = []
    for index in range(len(CHANNEL_ORDER)):
        channel: ImageObject = get_channel(image, index)
        greyscale_images.append(merge_channels((channel, channel, channel, opaque_alpha)))
    return greyscale_images


def join_channels(r_image: ImageObject, g_image: ImageObject, b_image: ImageObject, a_image: ImageObject,
                  channel_source: str = "matching") -> ImageObject:
# Packs four images into one RGBA image.
# "matching": output R = r_image's R, G = g_image's G, and so on.
# "first": every output channel reads index 0 of its image, the value split_to_greyscale wrote into R, G and B.

    if channel_source not in JOIN_CHANNEL_SOURCES:
        raise ConfigError(f"Invalid join channel source '{channel_source}'. Supported: {', '.join(JOIN_CHANNEL_SOURCES)}")

    images: Dict[str, ImageObject] = {"R": r_image, "G": g_image, "B": b_image, "A": a_image}
    _check_matching_dimensions({role: get_size(image) for role, image in images.items()})

    channels: List[ImageObject] = []
    for index, role in enumerate(CHANNEL_ORDER):
        source_index: int = index if channel_source == "matching" else 0
        channels.append(get_channel(images[role], source_index))
    return merge_channels(channels)


def reorder_normal_channels(image: ImageObject) -> ImageObject:
# (R, G, B, A) > (A, G, R, R). Not an involution: a second pass gives (R, G, A, A).

    red, green, _, alpha = (get_channel(image, index) for index in range(len(CHANNEL_ORDER)))
    return merge_channels((alpha, green, red, red))


def _check_matching_dimensions(sizes: Dict[str, tuple]) -> None:
# Every input must have exactly the same width and height as every other.

    reference_size = next(iter(sizes.values()))
    if any(size != reference_size for size in sizes.values()):
        raise DimensionMismatchError(sizes)




#                                              === Operations ===


def split_multi(multi_path: str, context: Optional[RemapContext] = None) -> RemapResult:
# Writes <stem>_R, _G, _B, _A greyscale images next to the multi map.
# Files are saved one by one; a failure leaves the ones already written on disk.

    context = context or create_context()
    result = RemapResult(operation="split-multi")
    multi_image: Optional[ImageObject] = None
    greyscale_images: List[ImageObject] = []

    try:
        multi_image = open_image_rgba(multi_path)
        result.resolution = get_size(multi_image)
        log(f"Processing: {describe_output(multi_path, result.resolution)}", "info")

        greyscale_images = split_to_greyscale(multi_image)
        for channel, greyscale_image in zip(CHANNEL_ORDER, greyscale_images):
            output_path: str = resolve_output_path(multi_path, SPLIT_SUFFIXES[channel], context)
            save_generated_texture(greyscale_image, output_path, context)
            result.output_paths.append(output_path)
            log(f"Created: {describe_output(output_path, result.resolution)}", "complete")
        return result

    finally:
        close_image_files([multi_image] + greyscale_images)


def join_multi(r_path: str, g_path: str, b_path: str, a_path: str, context: Optional[RemapContext] = None) -> RemapResult:
# Packs four channel images into <red stem>GBA, next to the red image.

    return join_multi_mapping({"R": r_path, "G": g_path, "B": b_path, "A": a_path}, context)


def join_multi_mapping(mapping: ChannelMapping, context: Optional[RemapContext] = None) -> RemapResult:
    context = context or create_context()
    result = RemapResult(operation="join-multi")
    loaded_images: Dict[str, ImageObject] = {}
    multi_image: Optional[ImageObject] = None

    try:
        for role in CHANNEL_ORDER:
            loaded_images[role] = open_image_rgba(mapping[role])
        # All four are decoded before comparing sizes, so an unreadable file is reported first.

        r_path: str = mapping["R"]
        log(f"Processing: {describe_output(r_path)}", "info")

        multi_image = join_channels(
            loaded_images["R"], loaded_images["G"], loaded_images["B"], loaded_images["A"],
            channel_source=context.join_channel_source,
        )
        result.resolution = get_size(multi_image)

        output_path: str = resolve_output_path(r_path, JOIN_SUFFIX, context)
        save_generated_texture(multi_image, output_path, context)
        result.output_paths.append(output_path)
        log(f"Created: {describe_output(output_path, result.resolution)}", "complete")
        return result

    finally:
        close_image_files(list(loaded_images.values()) + [multi_image])


def fix_normal(normal_path: str, context: Optional[RemapContext] = None) -> RemapResult:
# Writes <stem>_Fixed with channels reordered to (A, G, R, R).

    context = context or create_context()
    result = RemapResult(operation="fix-normal")
    normal_image: Optional[ImageObject] = None
    fixed_image: Optional[ImageObject] = None

    try:
        normal_image = open_image_rgba(normal_path)
        result.resolution = get_size(normal_image)
        log(f"Processing: {describe_output(normal_path, result.resolution)}", "info")

        fixed_image = reorder_normal_channels(normal_image)
        output_path: str = resolve_output_path(normal_path, FIXED_SUFFIX, context)
        save_generated_texture(fixed_image, output_path, context)
        result.output_paths.append(output_path)
        log(f"Created: {describe_output(output_path, result.resolution)}", "complete")
        return result

    finally:
        close_image_files([normal_image, fixed_image])




#                                         === Interactive mode ===


def run_interactive(context: RemapContext,
                    input_function: Optional[Callable[[str], str]] = None,
                    file_picker: Optional[Callable[..., List[str]]] = None) -> RemapResult:
# Menu + file dialog flow used when no subcommand is given.

    file_picker = file_picker or pick_files
    command: str = ask_command(input_function)

    if command == "fix-normal":
        normal_path = file_picker("Select Normal Map")[0]
        return fix_normal(normal_path, context)

    if command == "split-multi":
        multi_path = file_picker("Select Multi Map")[0]
        return split_multi(multi_path, context)

    paths: List[str] = file_picker("Select Multi Map Channel Images", multiple=True)
    return join_multi_mapping(select_channel_paths(paths), context)




#                                         === CLI entry point ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="channel-remapper",
        description="Split, join and reorder texture channels. Without a command, asks interactively.",
    )
    parser.add_argument("--format", dest="file_type", type=str.lower, choices=ALLOWED_FILE_TYPES, default=None,
                        help="Output file type (overrides FILE_TYPE from config.json).")
    parser.add_argument("--output-folder", dest="output_folder_name", default=None,
                        help="Subfolder of the source folder for generated files.")
    parser.add_argument("--join-source", dest="join_channel_source", choices=JOIN_CHANNEL_SOURCES, default=None,
                        help="Channel join-multi reads from each input: its own (matching) or the first (greyscale).")

    sub = parser.add_subparsers(dest="command")
    command_help = dict(COMMANDS)

    fix_parser = sub.add_parser("fix-normal", help=f"{command_help['fix-normal']}: reorder channels to (A, G, R, R).")
    fix_parser.add_argument("normal_path")

    split_parser = sub.add_parser("split-multi", help=f"{command_help['split-multi']}: write one greyscale image per RGBA channel.")
    split_parser.add_argument("multi_path")

    join_parser = sub.add_parser("join-multi", help=f"{command_help['join-multi']}: pack four channel images into one RGBA image.")
    join_parser.add_argument("r_path")
    join_parser.add_argument("g_path")
    join_parser.add_argument("b_path")
    join_parser.add_argument("a_path")
    return parser


def run_command(args: argparse.Namespace, context: RemapContext) -> RemapResult:
    if args.command == "fix-normal":
        return fix_normal(args.normal_path, context)
    if args.command == "split-multi":
        return split_multi(args.multi_path, context)
    if args.command == "join-multi":
        return join_multi(args.r_path, args.g_path, args.b_path, args.a_path, context)
    return run_interactive(context)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    start_time = time.time()

    try:
        context = create_context(args.file_type, args.output_folder_name, args.join_channel_source)
        run_command(args, context)
    except RemapError as error:
        log(f"Aborted: {error}", "error")
        return 1

    elapsed_time = time.time() - start_time
    log(f"Execution time: {elapsed_time:.2f} seconds", "info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
