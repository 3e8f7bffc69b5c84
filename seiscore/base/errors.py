# Licensed under the GPLv3 - see LICENSE
"""Errors raised while decoding recordings.

All derive from `ValueError`, so that code which only cares about bad input
can catch that, and from `SeisCoreError`, to catch only ours.
"""

__all__ = ['SeisCoreError', 'BadFilePath', 'BadHeaderData',
           'InvalidResampleFrequency', 'InvalidDatetimeValue',
           'UnknownComponentName', 'BadSignalData']


class SeisCoreError(ValueError):
    """Base class of all errors raised by seiscore."""


class BadFilePath(SeisCoreError):
    """Path is empty or has an extension not belonging to a known format."""


class BadHeaderData(SeisCoreError):
    """A header field could not be decoded or failed validation."""


class InvalidResampleFrequency(SeisCoreError):
    """Resample frequency is not a divisor of the recording frequency."""


class InvalidDatetimeValue(SeisCoreError):
    """Time is not a valid boundary of a window inside the recording."""


class UnknownComponentName(SeisCoreError):
    """Component is not one of those recorded."""


class BadSignalData(SeisCoreError):
    """The recording holds no usable samples."""
