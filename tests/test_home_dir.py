import os
import stat
from unittest.mock import patch

import pytest

from openv.home_dir import default_home_dir, get_or_create


def test_default_home_dir(tmp_path):
    with patch("openv.home_dir.Path.home", return_value=tmp_path):
        assert default_home_dir() == tmp_path / ".op_cli"


def test_get_or_create_creates_directory(tmp_path):
    home = get_or_create(tmp_path / ".op_cli")

    assert home == tmp_path / ".op_cli"
    assert home.is_dir()


def test_get_or_create_is_idempotent(tmp_path):
    first = get_or_create(tmp_path / ".op_cli")
    (first / "op_linux_amd64_v1.0.0").touch()

    second = get_or_create(tmp_path / ".op_cli")

    assert first == second
    assert (second / "op_linux_amd64_v1.0.0").exists()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_get_or_create_restricts_permissions(tmp_path):
    home = tmp_path / ".op_cli"
    home.mkdir(mode=0o755)
    home.chmod(0o755)

    get_or_create(home)

    assert stat.S_IMODE(home.stat().st_mode) == 0o700


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_get_or_create_new_directory_is_private(tmp_path):
    home = get_or_create(tmp_path / ".op_cli")

    assert stat.S_IMODE(home.stat().st_mode) == 0o700


def test_get_or_create_defaults_to_user_home(tmp_path):
    with patch("openv.home_dir.Path.home", return_value=tmp_path):
        home = get_or_create()

    assert home == tmp_path / ".op_cli"
    assert home.is_dir()
