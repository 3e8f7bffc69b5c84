# Licensed under the GPLv3 - see LICENSE
"""Readers of fixed-width little-endian fields.

A field is described by its byte offset, its kind, and the number of
elements of that kind it holds.  Kinds are:

========  =====  =====================================
kind      bytes  python value
========  =====  =====================================
char      1      `str` (the whole block, latin-1)
uint16    2      `int`
uint32    4      `int`
uint64    8      `int`
double    8      `float`
========  =====  =====================================

Fields with more than one element of a numeric kind are returned as tuples.
No alignment is assumed, and reading beyond the end of the data raises
`EOFError` rather than returning anything zero-filled.
"""
import struct
import functools


__all__ = ['FIELD_KINDS', 'field_struct', 'field_nbytes',
           'unpack_field', 'read_field']


FIELD_KINDS = {'char': 's',
               'uint16': 'H',
               'uint32': 'I',
               'uint64': 'Q',
               'double': 'd'}
"""Struct format characters of the supported field kinds."""


@functools.lru_cache()
def field_struct(kind, count=1):
    """Struct instance that unpacks ``count`` little-endian ``kind`` items."""
    try:
        code = FIELD_KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown field kind {kind!r}; should be one of "
                         f"{set(FIELD_KINDS)}") from None
    if count < 1:
        raise ValueError("field should contain at least one element.")
    return struct.Struct(f'<{count}{code}')


def field_nbytes(kind, count=1):
    """Number of bytes occupied by a field."""
    return field_struct(kind, count).size


def _convert(kind, count, values):
    if kind == 'char':
        return values[0].decode('latin-1')
    return values[0] if count == 1 else values


def unpack_field(buffer, offset, kind, count=1):
    """Decode a field from a buffer.

    Parameters
    ----------
    buffer : bytes or bytes-like
        Data holding the field.
    offset : int
        Byte offset of the field in ``buffer``.
    kind : str
        One of the keys of `FIELD_KINDS`.
    count : int, optional
        Number of elements in the field.  Default: 1.

    Returns
    -------
    value : str, int, float, or tuple of int or float
    """
    s = field_struct(kind, count)
    if offset < 0 or offset + s.size > len(buffer):
        raise EOFError(f"field of {s.size} bytes at offset {offset} extends "
                       f"beyond the {len(buffer)} bytes available.")
    return _convert(kind, count, s.unpack_from(buffer, offset))


def read_field(fh, offset, kind, count=1):
    """Read a field at an absolute offset from a binary filehandle.

    Arguments are as for `unpack_field`, except that the data are read from
    the filehandle ``fh``.  The filehandle position is left just after the
    field.
    """
    s = field_struct(kind, count)
    fh.seek(offset)
    data = fh.read(s.size)
    if len(data) != s.size:
        raise EOFError(f"could only read {len(data)} of the {s.size} bytes "
                       f"of the field at offset {offset}.")
    return _convert(kind, count, s.unpack(data))
