import os

from gsmconsole import paths


def test_path_exist():
    assert paths.exist(paths.__file__) is True


def test_missing_path(tmp_path):
    assert paths.exist(tmp_path / "nothing-here") is False


def test_directory_exists(tmp_path):
    assert paths.exist(str(tmp_path)) is True


def test_get_file_dir_uses_forward_slashes(tmp_path):
    target = tmp_path / "file.txt"
    result = paths.get_file_dir(str(target))
    assert "\\" not in result
    assert result == os.path.abspath(str(tmp_path)).replace("\\", "/")


def test_get_file_dir_relative_is_absolute():
    result = paths.get_file_dir("some/file.txt")
    assert os.path.isabs(result)
    assert result.endswith("/some")