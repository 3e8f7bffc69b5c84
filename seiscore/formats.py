# Licensed under the GPLv3 - see LICENSE
"""Routines to determine the format of recordings and read their headers."""
import os
import importlib
from types import MappingProxyType

from .base.errors import BadFilePath


__all__ = ['FILE_FORMATS', 'FORMAT_HEADERS', 'detect', 'get_header_class',
           'read_header', 'file_info']


FILE_FORMATS = MappingProxyType({'00': 'baikal7',
                                 'xx': 'baikal8',
                                 'bin': 'sigma'})
"""Format names, keyed by the file name extension."""

FORMAT_HEADERS = MappingProxyType({'baikal7': 'Baikal7Header',
                                   'baikal8': 'Baikal8Header',
                                   'sigma': 'SigmaHeader'})
"""Names of the header classes in the subpackage of each format."""


def detect(name):
    """Determine the format of a recording from its file name extension.

    Parameters
    ----------
    name : str or path-like
        Name of the recording.  The file itself is not accessed.

    Returns
    -------
    fmt : str
        One of 'baikal7', 'baikal8', or 'sigma'.

    Raises
    ------
    BadFilePath
        If the name is empty, has no extension, or an unknown one.
    """
    name = os.fspath(name)
    if not name:
        raise BadFilePath("empty file path.")
    extension = os.path.splitext(name)[1][1:]
    if not extension:
        raise BadFilePath(f"{name!r} has no extension.")
    try:
        return FILE_FORMATS[extension]
    except KeyError:
        raise BadFilePath(f"{name!r} has extension {extension!r}, which is "
                          f"not one of {set(FILE_FORMATS)}.") from None


def get_header_class(fmt):
    """Get the header class for a given format name."""
    try:
        class_name = FORMAT_HEADERS[fmt]
    except KeyError:
        raise BadFilePath(f"unknown format {fmt!r}.") from None
    module = importlib.import_module('.' + fmt, package='seiscore')
    return getattr(module, class_name)


def read_header(name, verify=True):
    """Read and decode the header of a recording.

    The format is determined from the file name extension.

    Parameters
    ----------
    name : str or path-like
        Name of the recording.
    verify : bool, optional
        Whether to check the header is valid.  Default: `True`.

    Returns
    -------
    header : `~seiscore.base.header.SeismicHeaderBase` subclass instance
    """
    return get_header_class(detect(name)).fromname(name, verify=verify)


def file_info(name, **kwargs):
    """Get standardized information on a recording.

    Parameters
    ----------
    name : str or path-like
        Name of the recording.
    **kwargs
        Further arguments for `~seiscore.Recording`, such as
        ``resample_frequency``.

    Returns
    -------
    info : `~seiscore.base.file_info.RecordingInfo`
        Evaluates as `False` if the recording could not be decoded, in
        which case ``info.errors`` will tell why.
    """
    from .recording import Recording

    return Recording(name, **kwargs).info
