# Licensed under the GPLv3 - see LICENSE
import re
import calendar
from collections import namedtuple
from decimal import Decimal, ROUND_DOWN, InvalidOperation

from astropy.time import Time

from .errors import BadHeaderData


__all__ = ['Coordinate', 'truncate', 'posix_time', 'check_date',
           'decode_packed_date', 'decode_packed_time',
           'decode_degree_minutes']


COORDINATE_PRECISION = 5
"""Number of decimals kept for coordinates, in degrees."""


class Coordinate(namedtuple('Coordinate', ['longitude', 'latitude'])):
    """Geographic location in degrees; negative means West or South."""
    __slots__ = ()

    def __str__(self):
        return f"(longitude={self.longitude}, latitude={self.latitude})"


def truncate(value, precision=COORDINATE_PRECISION):
    """Truncate a number towards zero to the given number of decimals.

    The truncation works on the shortest decimal representation of the
    value, so that a value that already has at most ``precision`` decimals
    is returned unchanged, i.e., ``truncate(truncate(x)) == truncate(x)``.
    """
    value = float(value)
    try:
        quantum = Decimal(1).scaleb(-precision)
        return float(Decimal(repr(value)).quantize(quantum,
                                                   rounding=ROUND_DOWN))
    except InvalidOperation:
        # Infinite or nan, or too large for the quantization.
        return value


def posix_time(seconds, fraction=0.):
    """Time from seconds since 1970-01-01T00:00:00 UTC, without leap seconds.

    Parameters
    ----------
    seconds : int
        Whole seconds since the epoch.
    fraction : float, optional
        Fractional seconds, passed on separately to keep full precision.

    Returns
    -------
    time : `~astropy.time.Time`
        In UTC, with nanosecond precision for display.
    """
    return Time(seconds, fraction, format='unix', scale='utc', precision=9)


def check_date(year, month, day):
    """Check a calendar date, raising `BadHeaderData` if it does not exist.

    Returns the number of seconds from the POSIX epoch to midnight UTC on
    the given date.
    """
    if not 1 <= year <= 9999:
        raise BadHeaderData(f"invalid year {year}.")
    if not 1 <= month <= 12:
        raise BadHeaderData(f"invalid month {month}.")
    ndays = calendar.monthrange(year, month)[1]
    if not 1 <= day <= ndays:
        raise BadHeaderData(f"invalid day {day}: {year:04d}-{month:02d} "
                            f"has {ndays} days.")
    return calendar.timegm((year, month, day, 0, 0, 0))


def decode_packed_date(value, century=2000):
    """Decode a date stored as a decimal number ``YYMMDD``.

    Parameters
    ----------
    value : int
        Number whose decimal digits give year, month and day.  It must have
        exactly six digits.
    century : int, optional
        Added to the two-digit year.  Default: 2000.

    Returns
    -------
    year, month, day : int
    """
    line = str(value)
    if len(line) != 6 or not line.isdigit():
        raise BadHeaderData(f"invalid date {line!r}: should have 6 digits.")
    year, month, day = int(line[:2]) + century, int(line[2:4]), int(line[4:])
    check_date(year, month, day)
    return year, month, day


def decode_packed_time(value):
    """Decode a time of day stored as a decimal number ``HHMMSS``.

    Returns
    -------
    hours, minutes, seconds : int
    """
    line = f"{value:06d}"
    if len(line) != 6 or not line.isdigit():
        raise BadHeaderData(f"invalid time {line!r}: should have 6 digits.")
    hours, minutes, seconds = int(line[:2]), int(line[2:4]), int(line[4:])
    if hours > 23:
        raise BadHeaderData(f"invalid hours value {hours}.")
    if minutes > 59:
        raise BadHeaderData(f"invalid minutes value {minutes}.")
    if seconds > 59:
        raise BadHeaderData(f"invalid seconds value {seconds}.")
    return hours, minutes, seconds


def decode_degree_minutes(text, degree_digits, hemispheres, nbytes=None):
    """Decode a coordinate written as degrees, decimal minutes and hemisphere.

    For instance, with ``degree_digits=3`` the longitude ``'03730.50E'``
    is 37 degrees and 30.5 minutes East, i.e., 37.50833.

    Parameters
    ----------
    text : str
        Coordinate text, ending in a hemisphere letter.
    degree_digits : int
        Number of leading characters giving the integer degrees.
    hemispheres : str
        Two letters, for the positive and the negative hemisphere,
        e.g., ``'EW'`` or ``'NS'``.
    nbytes : int, optional
        Required length of ``text``.  By default, not checked.

    Returns
    -------
    value : float
        In degrees, truncated to 5 decimals, negative for the second
        hemisphere.
    """
    if nbytes is not None and len(text) != nbytes:
        raise BadHeaderData(f"invalid coordinate {text!r}: should have "
                            f"{nbytes} characters.")
    hemisphere = text[-1:]
    if hemisphere == '' or hemisphere not in hemispheres:
        raise BadHeaderData(f"invalid coordinate {text!r}: should end in "
                            f"one of {', '.join(hemispheres)}.")
    match = re.fullmatch(rf"(?P<degrees>\d{{{degree_digits}}})"
                         rf"(?P<minutes>\d+(\.\d*)?)", text[:-1], re.ASCII)
    if match is None:
        raise BadHeaderData(f"invalid coordinate {text!r}: cannot interpret "
                            f"degrees and minutes.")
    degrees = int(match["degrees"])
    minutes = float(match["minutes"])
    if minutes >= 60:
        raise BadHeaderData(f"invalid coordinate {text!r}: minutes should "
                            f"be less than 60.")

    value = truncate(degrees + minutes / 60)
    return -value if hemisphere == hemispheres[1] else value
