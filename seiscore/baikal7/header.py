# Licensed under the GPLv3 - see LICENSE
"""
Definitions for Baikal-7 headers.

Implements a Baikal7Header class used to store the header bytes, and decode
the information therein.
"""
from ..base.header import HeaderParser, SeismicHeaderBase
from ..base.errors import BadHeaderData
from ..base.utils import Coordinate, truncate, posix_time


__all__ = ['TICKS_PER_SECOND', 'TICK_EPOCH', 'Baikal7Header']


TICKS_PER_SECOND = 256000000
"""Rate of the clock counting the start time."""

TICK_EPOCH = 315532800
"""POSIX seconds of 1980-01-01T00:00:00 UTC, where the tick count starts."""


class Baikal7Header(SeismicHeaderBase):
    """Decoder of a Baikal-7 recording header.

    Parameters
    ----------
    words : bytes
        Header bytes, starting at the beginning of the file.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.

    Returns
    -------
    header : `Baikal7Header`
    """

    _header_parser = HeaderParser(
        (('nchan', (0, 'uint16')),
         ('frequency', (22, 'uint16')),
         # Note: latitude comes first.
         ('coordinates', (72, 'double', 2)),
         ('time_begin', (104, 'uint64'))))

    format = 'baikal7'
    extension = '00'

    @property
    def frequency(self):
        """Sampling frequency in Hz."""
        frequency = self['frequency']
        if frequency == 0:
            raise BadHeaderData("invalid zero sampling frequency.")
        return frequency

    @property
    def time(self):
        """Time of the first sample, from the tick counter."""
        seconds, ticks = divmod(self['time_begin'], TICKS_PER_SECOND)
        nanoseconds = ticks * 1000000000 // TICKS_PER_SECOND
        return posix_time(TICK_EPOCH + seconds, nanoseconds * 1e-9)

    @property
    def coordinate(self):
        """Location of the logger."""
        latitude, longitude = self['coordinates']
        return Coordinate(truncate(longitude), truncate(latitude))
