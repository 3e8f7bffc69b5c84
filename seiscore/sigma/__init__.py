# Licensed under the GPLv3 - see LICENSE
"""Sigma seismic recording reader.

Sigma recordings carry the ``.bin`` extension.  Their header stores date and
time as decimal numbers ``YYMMDD`` and ``HHMMSS``, and the coordinates as
text in degrees and decimal minutes, followed by the hemisphere.
"""
from .header import SigmaHeader, SIGMA_SECONDS_OFFSET  # noqa
