"""File-type identification from leading bytes."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from portpath.infrastructure.storage.file_tools import FilesystemOps
from portpath.infrastructure.storage.path_string import PathLike


class FileType(Enum):
    """Formats recognized by their magic numbers."""

    UNKNOWN = "unknown"
    ARCHIVE = "archive"
    BITCODE = "bitcode"
    ELF = "elf"
    ELF_RELOCATABLE = "elf_relocatable"
    ELF_EXECUTABLE = "elf_executable"
    ELF_SHARED_OBJECT = "elf_shared_object"
    ELF_CORE = "elf_core"
    MACHO = "macho"
    MACHO_OBJECT = "macho_object"
    MACHO_EXECUTABLE = "macho_executable"
    MACHO_DYNAMIC_LIBRARY = "macho_dynamic_library"
    MACHO_BUNDLE = "macho_bundle"
    COFF_OBJECT = "coff_object"
    PE_EXECUTABLE = "pe_executable"


ARCHIVE_MAGIC = b"!<arch>\n"
BITCODE_MAGIC = b"BC\xc0\xde"
BITCODE_WRAPPER_MAGIC = b"\xde\xc0\x17\x0b"
ELF_MAGIC = b"\x7fELF"
PE_MAGIC = b"MZ"

# magic word -> byte order of the header fields that follow
_MACHO_MAGICS = {
    b"\xfe\xed\xfa\xce": "big",
    b"\xfe\xed\xfa\xcf": "big",
    b"\xce\xfa\xed\xfe": "little",
    b"\xcf\xfa\xed\xfe": "little",
}
_COFF_MACHINES = {b"\x4c\x01", b"\x64\x86", b"\xc4\x01", b"\x64\xaa"}

_ELF_TYPES = {
    1: FileType.ELF_RELOCATABLE,
    2: FileType.ELF_EXECUTABLE,
    3: FileType.ELF_SHARED_OBJECT,
    4: FileType.ELF_CORE,
}
_MACHO_TYPES = {
    1: FileType.MACHO_OBJECT,
    2: FileType.MACHO_EXECUTABLE,
    6: FileType.MACHO_DYNAMIC_LIBRARY,
    8: FileType.MACHO_BUNDLE,
}

# Longest prefix any rule looks at first; shorter files retry with less.
_PROBE_LENGTHS = (18, 8, 4, 2)


def identify_magic(magic: bytes) -> FileType:
    """Classify a byte prefix."""
    if magic.startswith(ARCHIVE_MAGIC):
        return FileType.ARCHIVE
    if magic.startswith(BITCODE_MAGIC) or magic.startswith(BITCODE_WRAPPER_MAGIC):
        return FileType.BITCODE
    if magic.startswith(ELF_MAGIC):
        if len(magic) >= 18:
            order = "big" if magic[5] == 2 else "little"
            return _ELF_TYPES.get(int.from_bytes(magic[16:18], order), FileType.ELF)
        return FileType.ELF
    order = _MACHO_MAGICS.get(magic[:4])
    if order is not None:
        if len(magic) >= 16:
            return _MACHO_TYPES.get(int.from_bytes(magic[12:16], order), FileType.MACHO)
        return FileType.MACHO
    if magic.startswith(PE_MAGIC):
        return FileType.PE_EXECUTABLE
    if magic[:2] in _COFF_MACHINES:
        return FileType.COFF_OBJECT
    return FileType.UNKNOWN


def _read_prefix(path: PathLike, ops: FilesystemOps) -> Optional[bytes]:
    for length in _PROBE_LENGTHS:
        result = ops.get_magic_number(path, length)
        if result.success:
            return result.data["magic"]
    return None


def identify_file_type(path: PathLike, ops: Optional[FilesystemOps] = None) -> FileType:
    """Sniff ``path``. Unreadable or tiny files are ``UNKNOWN``."""
    ops = ops or FilesystemOps()
    if not ops.is_regular_file(path):
        return FileType.UNKNOWN
    magic = _read_prefix(path, ops)
    if magic is None:
        return FileType.UNKNOWN
    return identify_magic(magic)


def has_magic_number(path: PathLike, magic: bytes, ops: Optional[FilesystemOps] = None) -> bool:
    ops = ops or FilesystemOps()
    result = ops.get_magic_number(path, len(magic))
    return result.success and result.data["magic"] == magic


def is_archive(path: PathLike, ops: Optional[FilesystemOps] = None) -> bool:
    return identify_file_type(path, ops) is FileType.ARCHIVE


def is_bitcode_file(path: PathLike, ops: Optional[FilesystemOps] = None) -> bool:
    return identify_file_type(path, ops) is FileType.BITCODE


def is_object_file(path: PathLike, ops: Optional[FilesystemOps] = None) -> bool:
    return identify_file_type(path, ops) in (
        FileType.ELF_RELOCATABLE,
        FileType.MACHO_OBJECT,
        FileType.COFF_OBJECT,
    )


def is_dynamic_library(path: PathLike, ops: Optional[FilesystemOps] = None) -> bool:
    file_type = identify_file_type(path, ops)
    if file_type in (FileType.ELF_SHARED_OBJECT, FileType.MACHO_DYNAMIC_LIBRARY):
        return True
    if file_type is FileType.PE_EXECUTABLE:
        return str(path).lower().endswith(".dll")
    return False
