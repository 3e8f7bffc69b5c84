# Licensed under the GPLv3 - see LICENSE
"""
Definitions for Baikal-8 headers.

Implements a Baikal8Header class used to store the header bytes, and decode
the information therein.
"""
import math
import warnings

from ..base.header import HeaderParser, SeismicHeaderBase
from ..base.errors import BadHeaderData
from ..base.utils import Coordinate, truncate, posix_time, check_date


__all__ = ['Baikal8Header']


class Baikal8Header(SeismicHeaderBase):
    """Decoder of a Baikal-8 recording header.

    Parameters
    ----------
    words : bytes
        Header bytes, starting at the beginning of the file.
    verify : bool, optional
        Whether to do basic verification of integrity.  Default: `True`.

    Returns
    -------
    header : `Baikal8Header`
    """

    _header_parser = HeaderParser(
        (('nchan', (0, 'uint16')),
         ('date', (6, 'uint16', 3)),  # day, month, year
         ('sampling_interval', (48, 'double')),
         ('seconds', (56, 'double')),  # since midnight
         ('coordinates', (72, 'double', 2))))  # longitude, latitude

    format = 'baikal8'
    extension = 'xx'

    @property
    def frequency(self):
        """Sampling frequency in Hz, rounded from the sampling interval."""
        interval = self['sampling_interval']
        if not (interval > 0 and math.isfinite(1 / interval)):
            raise BadHeaderData(f"invalid sampling interval {interval}.")
        # Round half up, like the sample indices.
        frequency = math.floor(1 / interval + 0.5)
        if frequency == 0 or frequency >= 1 << 16:
            raise BadHeaderData(f"sampling interval {interval} gives "
                                f"frequency {frequency} out of range.")
        if abs(frequency * interval - 1) > 1e-6:
            warnings.warn(f"sampling interval {interval} does not "
                          f"correspond to an integer frequency; using "
                          f"{frequency} Hz.")
        return frequency

    @property
    def time(self):
        """Time of the first sample."""
        day, month, year = self['date']
        midnight = check_date(year, month, day)
        seconds = self['seconds']
        if not (0 <= seconds < 1e9):
            raise BadHeaderData(f"invalid start seconds {seconds}.")
        whole = int(seconds)
        nanoseconds = int((seconds - whole) * 1e9)
        return posix_time(midnight + whole, nanoseconds * 1e-9)

    @property
    def coordinate(self):
        """Location of the logger."""
        longitude, latitude = self['coordinates']
        return Coordinate(truncate(longitude), truncate(latitude))
