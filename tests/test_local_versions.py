import pytest

from openv.errors import NoLocalVersionError
from openv.local_versions import find_local_version, find_local_versions
from openv.types import Version


def touch_all(directory, names):
    for name in names:
        (directory / name).touch()


def test_find_all_local_versions(tmp_path):
    touch_all(tmp_path, [
        "op_linux_amd64_v1.10.0",
        "op_darwin_arm64_v2.0.0",
        "README.md",
        "op_linux_amd64_v1.11.2",
    ])

    found = find_local_versions(tmp_path)

    assert [local.path.name for local in found] == [
        "op_linux_amd64_v1.10.0",
        "op_linux_amd64_v1.11.2",
    ]


def test_find_local_version_selects_newest(tmp_path, linux_amd64):
    touch_all(tmp_path, [
        "op_linux_amd64_v1.10.0",
        "op_linux_amd64_v1.11.2",
        "op_darwin_arm64_v2.0.0",
    ])

    local = find_local_version(tmp_path, linux_amd64)

    assert local.version == Version(1, 11, 2)
    assert local.platform == linux_amd64
    assert local.path == tmp_path / "op_linux_amd64_v1.11.2"


def test_find_local_version_ignores_other_platforms(tmp_path, linux_amd64):
    touch_all(tmp_path, [
        "op_linux_amd64_v1.2.0",
        "op_linux_386_v9.0.0",
        "op_apple_universal_v9.0.0",
    ])

    assert find_local_version(tmp_path, linux_amd64).version == Version(1, 2, 0)


def test_find_local_version_compares_semantically(tmp_path, linux_amd64):
    touch_all(tmp_path, ["op_linux_amd64_v1.9.0", "op_linux_amd64_v1.10.0"])

    assert find_local_version(tmp_path, linux_amd64).version == Version(1, 10, 0)


def test_find_local_version_tie_break_is_name_order(tmp_path, linux_amd64):
    touch_all(tmp_path, ["op_linux_amd64_v1.2.3.zip", "op_linux_amd64_v1.2.3"])

    local = find_local_version(tmp_path, linux_amd64)

    assert local.path.name == "op_linux_amd64_v1.2.3"


def test_find_local_version_no_matching_platform(tmp_path, linux_amd64):
    touch_all(tmp_path, ["op_darwin_arm64_v2.0.0", "op_windows_amd64_v2.0.0", "notes.txt"])

    with pytest.raises(NoLocalVersionError) as exc:
        find_local_version(tmp_path, linux_amd64)
    assert exc.value.platform == linux_amd64


def test_find_local_version_empty_directory(tmp_path, linux_amd64):
    with pytest.raises(NoLocalVersionError):
        find_local_version(tmp_path, linux_amd64)


def test_find_local_version_does_not_recurse(tmp_path, linux_amd64):
    nested = tmp_path / "nested"
    nested.mkdir()
    touch_all(nested, ["op_linux_amd64_v1.0.0"])

    with pytest.raises(NoLocalVersionError):
        find_local_version(tmp_path, linux_amd64)


def test_find_local_version_missing_directory(tmp_path, linux_amd64):
    with pytest.raises(FileNotFoundError):
        find_local_version(tmp_path / "absent", linux_amd64)
