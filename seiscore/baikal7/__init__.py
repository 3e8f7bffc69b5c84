# Licensed under the GPLv3 - see LICENSE
"""Baikal-7 seismic recording reader.

Baikal-7 recordings carry the ``.00`` extension.  Their header holds the
sampling frequency directly, the coordinates as doubles, and the start time
as a counter of 256 MHz clock ticks since 1980-01-01.
"""
from .header import Baikal7Header  # noqa
