"""
Upload storage tests.
"""

import io
import re

from worklog.core.uploads import UploadStorage


def test_unique_name_keeps_extension():
    name = UploadStorage.unique_name("diagram.final.svg")
    assert re.fullmatch(r"\d+-\d+\.svg", name)


def test_unique_name_without_extension():
    assert re.fullmatch(r"\d+-\d+", UploadStorage.unique_name(None))


def test_save_creates_directory_and_returns_url(tmp_path):
    storage = UploadStorage(tmp_path / "nested" / "uploads", "/media/")

    url = storage.save("photo.jpg", io.BytesIO(b"jpeg bytes"))

    assert url.startswith("/media/")
    assert (tmp_path / "nested" / "uploads" / url.rsplit("/", 1)[1]).read_bytes() == b"jpeg bytes"


def test_save_ignores_directories_in_client_filename(tmp_path):
    storage = UploadStorage(tmp_path, "/uploads")

    url = storage.save("../../etc/passwd.txt", io.BytesIO(b"x"))

    assert ".." not in url
    assert len(list(tmp_path.iterdir())) == 1
