# Licensed under the GPLv3 - see LICENSE
"""Access to seismic recordings as a whole.

Combines format detection, header decoding, and the size of the file to
give the time span of a recording, and maps windows in time onto ranges of
sample indices, taking into account a possible resampling.
"""
import os
import math
import operator
from collections import namedtuple

import numpy as np
import astropy.units as u
from astropy.time import Time

from .formats import detect, get_header_class
from .base.header import NCHAN
from .base.errors import (InvalidResampleFrequency, InvalidDatetimeValue,
                          UnknownComponentName, BadSignalData)
from .base.utils import truncate
from .base.file_info import RecordingInfo


__all__ = ['COMPONENTS', 'HEADER_NBYTES', 'SAMPLE_NBYTES',
           'SampleRange', 'HeaderCache', 'Recording']


COMPONENTS = 'ZXY'
"""Order in which the components are interleaved in the samples."""

HEADER_NBYTES = 120 + 72 * NCHAN
"""Number of bytes preceding the samples, for all formats."""

SAMPLE_NBYTES = 4
"""Number of bytes of each sample of a single component."""


SampleRange = namedtuple('SampleRange', ['start_index', 'stop_index'])
SampleRange.__doc__ = """Half-open range of sample indices."""


class HeaderCache:
    """Single-entry cache of the last decoded header.

    Pass an instance to `Recording` to avoid decoding the header again for
    every derived quantity.  The entry is keyed by the absolute path, and
    the modification time and size of the file, so that a file rewritten
    with a different time stamp or size is decoded anew; use `clear` to
    force this in any other case.
    """

    def __init__(self):
        self.clear()

    def clear(self):
        """Remove the cached header."""
        self._key = None
        self._header = None

    @staticmethod
    def _make_key(name):
        stat = os.stat(name)
        return (os.path.abspath(name), stat.st_mtime_ns, stat.st_size)

    def get(self, name, reader):
        """Get the header of file ``name``, using ``reader(name)`` if needed.

        Any exception raised by ``reader`` propagates and leaves the cache
        empty.
        """
        key = self._make_key(name)
        if key != self._key:
            self.clear()
            self._header = reader(name)
            self._key = key
        return self._header

    def __contains__(self, name):
        return self._key is not None and self._key[0] == os.path.abspath(name)


class Recording:
    """Seismic recording from a Baikal-7, Baikal-8, or Sigma logger.

    All properties are derived from the file on each access, i.e., the
    file is opened, read, and closed again.

    Parameters
    ----------
    path : str or path-like
        Name of the recording.  Its extension determines the format.
    resample_frequency : int, optional
        Frequency in Hz at which the signal is to be used.  It has to be a
        divisor of the frequency of the recording.  Default: 0, which means
        the frequency of the recording is used.
    use_averaging : bool, optional
        Whether consumers resampling the signal should average samples
        rather than pick every n-th one.  Default: `False`.
    cache : `HeaderCache`, optional
        If given, used to store the decoded header.

    Examples
    --------
    ::

        >>> rec = Recording('HF_0019_2019-08-16_08-31-08.00',
        ...                 resample_frequency=100)  # doctest: +SKIP
        >>> rec.sample_range('2019-08-16T08:40:00',
        ...                  '2019-08-16T08:50:00')  # doctest: +SKIP
        SampleRange(start_index=541000, stop_index=1141000)
    """

    info = RecordingInfo()

    def __init__(self, path, resample_frequency=0, use_averaging=False,
                 cache=None):
        self._path = os.fspath(path)
        self._resample_frequency = operator.index(resample_frequency)
        self._use_averaging = bool(use_averaging)
        self._cache = cache

    @property
    def path(self):
        """Name of the recording file."""
        return self._path

    @property
    def name(self):
        """Base name of the recording file."""
        return os.path.basename(self._path)

    @property
    def use_averaging(self):
        """Whether resampling should average samples."""
        return self._use_averaging

    @property
    def format(self):
        """Format of the recording, determined from the file extension."""
        return detect(self._path)

    @property
    def header(self):
        """Decoded header of the recording."""
        header_class = get_header_class(self.format)
        if self._cache is not None:
            return self._cache.get(self._path, header_class.fromname)
        return header_class.fromname(self._path)

    @property
    def origin_frequency(self):
        """Sampling frequency of the recording in Hz."""
        return self.header.frequency

    @property
    def resample_frequency(self):
        """Frequency in Hz at which the signal is to be used.

        Raises
        ------
        InvalidResampleFrequency
            If the requested frequency does not divide the frequency of
            the recording.
        """
        frequency = self.origin_frequency
        if self._resample_frequency == 0:
            return frequency
        if (self._resample_frequency < 0
                or frequency % self._resample_frequency != 0):
            raise InvalidResampleFrequency(
                f"resample frequency {self._resample_frequency} Hz is not a "
                f"divisor of the recording frequency {frequency} Hz.")
        return self._resample_frequency

    @property
    def resample_parameter(self):
        """Number of recorded samples per resampled sample."""
        header = self.header
        resample_frequency = self.resample_frequency
        return header.frequency // resample_frequency

    def _payload_nbytes(self):
        return max(os.path.getsize(self._path) - HEADER_NBYTES, 0)

    @property
    def number_of_samples(self):
        """Number of complete samples of each component."""
        return self._payload_nbytes() // (NCHAN * SAMPLE_NBYTES)

    @property
    def file_size_remainder(self):
        """Number of bytes after the last complete sample."""
        return self._payload_nbytes() % (NCHAN * SAMPLE_NBYTES)

    @property
    def start_time(self):
        """Time of the first sample."""
        header = self.header
        return header.time + header.time_offset

    @property
    def duration(self):
        """Time covered by the samples.

        Truncated to one decimal more than the number of digits of the
        frequency, which is enough to recover the number of samples.
        """
        frequency = self.origin_frequency
        precision = math.ceil(math.log10(frequency)) + 1
        return truncate(self.number_of_samples / frequency, precision) * u.s

    @property
    def stop_time(self):
        """Time just after the last sample.

        Raises
        ------
        BadSignalData
            If the recording does not contain any samples.
        """
        duration = self.duration
        if duration.value <= 0:
            raise BadSignalData(f"{self.name} does not contain any samples.")
        return self.start_time + duration

    def is_time_in_window(self, time, boundary='start'):
        """Whether a time can be used as a boundary of a window.

        A time that starts a window should lie at or after the start of the
        recording, and before its stop, while a time that stops a window
        should lie after the start, and at or before the stop.  Hence,
        adjacent windows can be chained without gaps or overlaps.

        Parameters
        ----------
        time : `~astropy.time.Time`, str, or `~datetime.datetime`
            Time to check.  If not a `~astropy.time.Time`, it is
            interpreted as UTC.
        boundary : {'start', 'stop'}, optional
            Whether the time is to start or stop the window.

        Returns
        -------
        valid : bool

        Raises
        ------
        InvalidDatetimeValue
            If ``time`` cannot be interpreted as a single time.
        """
        if boundary not in ('start', 'stop'):
            raise ValueError(f"boundary should be 'start' or 'stop', not "
                             f"{boundary!r}.")
        time = self._as_time(time)
        start_time, stop_time = self.start_time, self.stop_time
        if boundary == 'start':
            return bool(start_time <= time < stop_time)
        else:
            return bool(start_time < time <= stop_time)

    @staticmethod
    def _as_time(time):
        try:
            time = Time(time, scale='utc', precision=9)
        except (ValueError, TypeError) as exc:
            raise InvalidDatetimeValue(f"cannot interpret {time!r} as a "
                                       f"time.") from exc
        if not time.isscalar:
            raise InvalidDatetimeValue("window boundaries should be single "
                                       "times.")
        return time

    def sample_range(self, start, stop):
        """Range of sample indices covering a window in time.

        Indices are those of the samples at the recording frequency.  The
        length of the range is a multiple of the resample parameter, with
        any excess samples removed from the end.

        Parameters
        ----------
        start, stop : `~astropy.time.Time`, str, or `~datetime.datetime`
            Start and stop of the window.  See `is_time_in_window`.

        Returns
        -------
        sample_range : `SampleRange`
            With ``start_index`` and ``stop_index`` attributes.

        Raises
        ------
        InvalidDatetimeValue
            If either boundary lies outside of the recording, or if the
            start is not before the stop.
        InvalidResampleFrequency
            If the resample frequency is not valid for this recording.
        """
        start, stop = self._as_time(start), self._as_time(stop)
        if not self.is_time_in_window(start, 'start'):
            raise InvalidDatetimeValue(f"window start {start.isot} is not "
                                       f"inside the recording.")
        if not self.is_time_in_window(stop, 'stop'):
            raise InvalidDatetimeValue(f"window stop {stop.isot} is not "
                                       f"inside the recording.")
        if start >= stop:
            raise InvalidDatetimeValue(f"window start {start.isot} is not "
                                       f"before its stop {stop.isot}.")

        frequency = self.origin_frequency
        resample_parameter = self.resample_parameter
        start_time = self.start_time
        start_index, stop_index = (
            int(np.floor((time - start_time).to_value(u.s) * frequency + 0.5))
            for time in (start, stop))
        stop_index -= (stop_index - start_index) % resample_parameter
        return SampleRange(start_index, stop_index)

    @staticmethod
    def component_index(component):
        """Position of a component in the interleaved samples.

        Raises
        ------
        UnknownComponentName
            If ``component`` is not one of 'Z', 'X', or 'Y'.
        """
        if not (isinstance(component, str) and len(component) == 1
                and component in COMPONENTS):
            raise UnknownComponentName(f"component {component!r} is not one "
                                       f"of {', '.join(COMPONENTS)}.")
        return COMPONENTS.index(component)

    def read_signal(self, component, start_index=None, stop_index=None):
        """Read the samples of one component.

        Samples are returned at the recording frequency, i.e., no
        resampling is done.

        Parameters
        ----------
        component : {'Z', 'X', 'Y'}
            Component to read.
        start_index, stop_index : int, optional
            Range of sample indices to read, interpreted as for a slice.
            By default, all samples are read.

        Returns
        -------
        signal : `~numpy.ndarray`
            Of 32-bit integers.
        """
        index = self.component_index(component)
        start_index, stop_index, _ = slice(start_index, stop_index).indices(
            self.number_of_samples)
        count = max(stop_index - start_index, 0) * NCHAN
        with open(self._path, 'rb') as fh:
            fh.seek(HEADER_NBYTES + start_index * NCHAN * SAMPLE_NBYTES)
            data = np.fromfile(fh, dtype='<i4', count=count)
        if data.size != count:
            raise EOFError(f"could only read {data.size} of {count} values.")
        return np.ascontiguousarray(data.reshape(-1, NCHAN)[:, index])

    def __repr__(self):
        return (f"{self.__class__.__name__}({self._path!r}, "
                f"resample_frequency={self._resample_frequency}, "
                f"use_averaging={self._use_averaging})")
