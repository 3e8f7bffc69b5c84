# Licensed under the GPLv3 - see LICENSE
"""Baikal-8 seismic recording reader.

Baikal-8 recordings carry the ``.xx`` extension.  Their header holds the
sampling interval rather than the frequency, and the start time as a date
plus seconds since midnight.
"""
from .header import Baikal8Header  # noqa
