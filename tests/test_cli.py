"""Tests for the `b64view` CLI."""

from __future__ import annotations

import io
from base64 import b64encode
from pathlib import Path
from typing import Final

import pytest

from b64view.cli import b64view

MEOW: Final = b"MEOWMEOW FUZZYFACE."


@pytest.fixture
def meow_file(tmp_path: Path) -> Path:
    path = tmp_path / "meow.bin"
    path.write_bytes(MEOW)
    return path


def test_whole_file(meow_file: Path) -> None:
    out = io.BytesIO()
    assert b64view([str(meow_file)], out=out) == 0
    assert out.getvalue() == b"TUVPV01FT1cgRlVaWllGQUNFLg=="


def test_large_file(tmp_path: Path) -> None:
    data = bytes(range(256)) * 100
    path = tmp_path / "large.bin"
    path.write_bytes(data)

    out = io.BytesIO()
    assert b64view([str(path), "--chunk-size", "999"], out=out) == 0
    assert out.getvalue() == b64encode(data)


def test_length(meow_file: Path) -> None:
    out = io.BytesIO()
    assert b64view([str(meow_file), "--length"], out=out) == 0
    assert out.getvalue() == b"28\n"


def test_range(meow_file: Path) -> None:
    out = io.BytesIO()
    assert b64view([str(meow_file), "--range", "bytes=-4"], out=out) == 0
    assert out.getvalue() == b"Lg=="

    out = io.BytesIO()
    assert b64view([str(meow_file), "-r", "bytes=6-12"], out=out) == 0
    assert out.getvalue() == b"1FT1cgR"


def test_range_not_satisfiable(meow_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = io.BytesIO()
    assert b64view([str(meow_file), "--range", "bytes=28-"], out=out) == -1
    assert out.getvalue() == b""
    assert "encoded length is 28" in capsys.readouterr().err


def test_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert b64view([str(tmp_path / "missing.bin")], out=io.BytesIO()) == -1
    assert "missing.bin" in capsys.readouterr().err


def test_bad_chunk_size(meow_file: Path) -> None:
    with pytest.raises(SystemExit) as e:
        b64view([str(meow_file), "--chunk-size", "1000"], out=io.BytesIO())
    assert e.value.code == 2


def test_range_spanning_many_chunks(tmp_path: Path) -> None:
    data = bytes(range(256)) * 400
    expected = b64encode(data)
    path = tmp_path / "large.bin"
    path.write_bytes(data)

    out = io.BytesIO()
    assert b64view([str(path), "--range", "bytes=3-"], out=out) == 0
    assert out.getvalue() == expected[3:]
