import sys
import os
import pytest
from PIL import Image

# Add the root directory to the Python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import channel_remapper
from channel_remapper import main, run_interactive
from remapper_backend.errors import InvalidCommand, SelectionError
from remapper_backend.io_backend import ask_command, create_context
from remapper_utils import select_channel_paths


def write_image(path, color, size=(2, 2)):
    Image.new("RGBA", size, color).save(path)
    return str(path)


def answers(*values):
    """Returns an input() replacement that replays the given answers."""
    remaining = list(values)
    return lambda prompt="": remaining.pop(0)


@pytest.fixture
def channel_images(tmp_path):
    return {
        "R": write_image(tmp_path / "foo_R.png", (10, 0, 0, 0)),
        "G": write_image(tmp_path / "foo_G.png", (0, 20, 0, 0)),
        "B": write_image(tmp_path / "foo_B.png", (0, 0, 30, 0)),
        "A": write_image(tmp_path / "foo_A.png", (0, 0, 0, 40)),
    }


def test_split_multi_command(tmp_path, capsys):
    source = write_image(tmp_path / "foo.png", (1, 2, 3, 4))

    assert main(["--format", "png", "split-multi", source]) == 0

    for suffix in "RGBA":
        assert (tmp_path / f"foo_{suffix}.png").is_file()
    assert "Created: foo_A.png" in capsys.readouterr().out


def test_fix_normal_command_uses_configured_format(tmp_path):
    source = write_image(tmp_path / "normal.png", (1, 2, 3, 4))

    assert main(["--format", "tga", "fix-normal", source]) == 0
    assert (tmp_path / "normal_Fixed.tga").is_file()


def test_format_option_is_case_insensitive(tmp_path):
    source = write_image(tmp_path / "normal.png", (1, 2, 3, 4))

    assert main(["--format", "TGA", "fix-normal", source]) == 0
    assert (tmp_path / "normal_Fixed.tga").is_file()


def test_join_multi_command(tmp_path, channel_images):
    argv = ["--format", "png", "join-multi", channel_images["R"], channel_images["G"], channel_images["B"], channel_images["A"]]

    assert main(argv) == 0
    with Image.open(tmp_path / "foo_RGBA.png") as joined:
        assert joined.convert("RGBA").getpixel((1, 1)) == (10, 20, 30, 40)


def test_join_multi_command_with_first_channel_source(tmp_path, channel_images):
    argv = ["--format", "png", "--join-source", "first", "join-multi",
            channel_images["R"], channel_images["G"], channel_images["B"], channel_images["A"]]

    assert main(argv) == 0
    with Image.open(tmp_path / "foo_RGBA.png") as joined:
        assert joined.convert("RGBA").getpixel((0, 0)) == (10, 0, 0, 0)


def test_errors_are_reported_and_return_exit_code(tmp_path, capsys):
    assert main(["fix-normal", str(tmp_path / "missing.png")]) == 1
    assert "Aborted:" in capsys.readouterr().out


def test_invalid_output_folder_is_rejected(tmp_path):
    source = write_image(tmp_path / "foo.png", (1, 2, 3, 4))
    assert main(["--output-folder", "a/b", "split-multi", source]) == 1


def test_unknown_format_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["--format", "jpg", "split-multi", "foo.png"])
    assert excinfo.value.code == 2


def test_ask_command_maps_menu_numbers():
    assert ask_command(answers("1")) == "fix-normal"
    assert ask_command(answers("2")) == "split-multi"
    assert ask_command(answers("3")) == "join-multi"
    assert ask_command(answers("")) == "fix-normal"


@pytest.mark.parametrize("answer", ["0", "4", "split", "-1"])
def test_ask_command_rejects_unknown_choice(answer):
    with pytest.raises(InvalidCommand):
        ask_command(answers(answer))


def test_select_channel_paths_assigns_roles_by_suffix():
    paths = ["x/foo_A.tga", "x/foo_R.png", "x/foo_B.tga", "x/foo_G.tga"]
    assert select_channel_paths(paths) == {"R": "x/foo_R.png", "G": "x/foo_G.tga", "B": "x/foo_B.tga", "A": "x/foo_A.tga"}


@pytest.mark.parametrize("paths", [
    ["foo_R.png", "foo_G.png", "foo_B.png"],
    ["foo_R.png", "foo_G.png", "foo_B.png", "foo_A.png", "foo_X.png"],
    ["foo_R.png", "foo_G.png", "foo_B.png", "foo_X.png"],
    ["foo_R.png", "foo_R2.png", "foo_B.png", "foo_A.png"],
    ["foo_r.png", "foo_g.png", "foo_b.png", "foo_a.png"],
])
def test_select_channel_paths_rejects_bad_selection(paths):
    with pytest.raises(SelectionError):
        select_channel_paths(paths)


def test_interactive_join(tmp_path, channel_images):
    context = create_context(file_type="png", output_folder_name="", join_channel_source="matching")
    picked = [channel_images["B"], channel_images["A"], channel_images["R"], channel_images["G"]]

    def picker(title, multiple=False):
        assert multiple
        return picked

    result = run_interactive(context, input_function=answers("3"), file_picker=picker)

    assert result.output_paths == [str(tmp_path / "foo_RGBA.png")]


def test_interactive_split(tmp_path):
    context = create_context(file_type="tga", output_folder_name="", join_channel_source="matching")
    source = write_image(tmp_path / "multi.png", (1, 2, 3, 4))

    result = run_interactive(context, input_function=answers("2"), file_picker=lambda title, multiple=False: [source])

    assert len(result.output_paths) == 4
    assert (tmp_path / "multi_R.tga").is_file()


def test_interactive_cancelled_dialog_aborts(monkeypatch, capsys):
    def cancelled(title, multiple=False):
        raise SelectionError(f"No file selected ({title}).")

    monkeypatch.setattr(channel_remapper, "pick_files", cancelled)
    monkeypatch.setattr("builtins.input", answers("1"))

    assert main([]) == 1
    assert "No file selected" in capsys.readouterr().out
