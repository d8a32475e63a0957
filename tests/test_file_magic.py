"""Tests for magic-number based file identification."""

import os

import pytest

from portpath.infrastructure.storage.file_magic import (
    FileType,
    has_magic_number,
    identify_file_type,
    identify_magic,
    is_archive,
    is_bitcode_file,
    is_dynamic_library,
    is_object_file,
)


def _elf(e_type: int, big_endian: bool = False) -> bytes:
    header = bytearray(b"\x7fELF" + bytes(14))
    header[5] = 2 if big_endian else 1
    header[16:18] = e_type.to_bytes(2, "big" if big_endian else "little")
    return bytes(header)


def _write(tmp_path, name, content: bytes) -> str:
    full = os.path.join(str(tmp_path), name)
    with open(full, "wb") as f:
        f.write(content)
    return full


@pytest.mark.parametrize(
    "magic, expected",
    [
        (b"!<arch>\nxxxx", FileType.ARCHIVE),
        (b"BC\xc0\xde\x00", FileType.BITCODE),
        (b"\xde\xc0\x17\x0b\x00", FileType.BITCODE),
        (_elf(1), FileType.ELF_RELOCATABLE),
        (_elf(2, big_endian=True), FileType.ELF_EXECUTABLE),
        (_elf(3), FileType.ELF_SHARED_OBJECT),
        (_elf(4), FileType.ELF_CORE),
        (b"\x7fELF", FileType.ELF),
        (b"\xcf\xfa\xed\xfe" + bytes(8) + (6).to_bytes(4, "little"), FileType.MACHO_DYNAMIC_LIBRARY),
        (b"\xfe\xed\xfa\xce" + bytes(8) + (1).to_bytes(4, "big"), FileType.MACHO_OBJECT),
        (b"\xce\xfa\xed\xfe", FileType.MACHO),
        (b"MZ\x90\x00", FileType.PE_EXECUTABLE),
        (b"\x64\x86\x03\x00", FileType.COFF_OBJECT),
        (b"plain text", FileType.UNKNOWN),
        (b"", FileType.UNKNOWN),
    ],
)
def test_identify_magic(magic, expected):
    assert identify_magic(magic) is expected


class TestIdentifyFileType:
    """Sniffing files on disk."""

    def test_archive(self, tmp_path):
        path = _write(tmp_path, "libfoo.a", b"!<arch>\n" + b"x" * 32)
        assert identify_file_type(path) is FileType.ARCHIVE
        assert is_archive(path)
        assert not is_bitcode_file(path)

    def test_short_bitcode_file(self, tmp_path):
        path = _write(tmp_path, "m.bc", b"BC\xc0\xde")
        assert is_bitcode_file(path)

    def test_shared_object(self, tmp_path):
        path = _write(tmp_path, "libfoo.so", _elf(3) + bytes(16))
        assert is_dynamic_library(path)
        assert not is_object_file(path)

    def test_object_file(self, tmp_path):
        path = _write(tmp_path, "foo.o", _elf(1))
        assert is_object_file(path)

    def test_pe_dynamic_library_needs_dll_suffix(self, tmp_path):
        dll = _write(tmp_path, "foo.DLL", b"MZ" + bytes(30))
        exe = _write(tmp_path, "foo.exe", b"MZ" + bytes(30))
        assert is_dynamic_library(dll)
        assert not is_dynamic_library(exe)

    def test_missing_or_directory_is_unknown(self, tmp_path):
        assert identify_file_type(os.path.join(str(tmp_path), "ghost")) is FileType.UNKNOWN
        assert identify_file_type(str(tmp_path)) is FileType.UNKNOWN

    def test_one_byte_file_is_unknown(self, tmp_path):
        assert identify_file_type(_write(tmp_path, "x", b"M")) is FileType.UNKNOWN

    def test_has_magic_number(self, tmp_path):
        path = _write(tmp_path, "f", b"\x7fELFrest")
        assert has_magic_number(path, b"\x7fELF")
        assert not has_magic_number(path, b"MZ")
        assert not has_magic_number(path, b"\x7fELFrest-and-more")
