# Licensed under the GPLv3 - see LICENSE
"""
Definitions for Sigma headers.

Implements a SigmaHeader class used to store the header bytes, and decode
the information therein.
"""
import astropy.units as u

from ..base.header import HeaderParser, SeismicHeaderBase
from ..base.errors import BadHeaderData
from ..base.utils import (Coordinate, posix_time, check_date,
                          decode_packed_date, decode_packed_time,
                          decode_degree_minutes)


__all__ = ['SIGMA_SECONDS_OFFSET', 'SigmaHeader']


SIGMA_SECONDS_OFFSET = 2 * u.s
"""Bias of the Sigma clock, added to the header time of the first sample.

Not applied by `SigmaHeader` itself, but by `~seiscore.Recording`.
"""


class SigmaHeader(SeismicHeaderBase):
    """Decoder of a Sigma recording header.

    Parameters
    ----------
    words : bytes
        Header bytes, starting at the beginning of the file.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.

    Returns
    -------
    header : `SigmaHeader`
    """

    _header_parser = HeaderParser(
        (('nchan', (12, 'uint16')),
         ('frequency', (24, 'uint16')),
         ('latitude', (40, 'char', 8)),  # e.g., '5530.50N'
         ('longitude', (48, 'char', 9)),  # e.g., '03730.50E'
         ('date', (60, 'uint32')),  # YYMMDD
         ('time', (64, 'uint32'))))  # HHMMSS

    format = 'sigma'
    extension = 'bin'

    time_offset = SIGMA_SECONDS_OFFSET

    @property
    def frequency(self):
        """Sampling frequency in Hz."""
        frequency = self['frequency']
        if frequency == 0:
            raise BadHeaderData("invalid zero sampling frequency.")
        return frequency

    @property
    def time(self):
        """Time of the first sample according to the header.

        Does not include the clock bias ``time_offset``.
        """
        year, month, day = decode_packed_date(self['date'])
        hours, minutes, seconds = decode_packed_time(self['time'])
        midnight = check_date(year, month, day)
        return posix_time(midnight + hours * 3600 + minutes * 60 + seconds)

    @property
    def coordinate(self):
        """Location of the logger."""
        longitude = decode_degree_minutes(self['longitude'], 3, 'EW',
                                          nbytes=9)
        latitude = decode_degree_minutes(self['latitude'], 2, 'NS')
        return Coordinate(longitude, latitude)
