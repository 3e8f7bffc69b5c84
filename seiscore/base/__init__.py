# Licensed under the GPLv3 - see LICENSE
"""Base implementations shared between all formats.

Each recording starts with a fixed-layout header, followed by 32-bit
samples of the three components interleaved in Z, X, Y order.  The
`~seiscore.base.fields` module reads little-endian scalars at given byte
offsets, and `~seiscore.base.header` builds keyword parsers out of those to
define the header classes of the various formats.  Decoders for timestamps
and coordinates that are shared between the formats live in
`~seiscore.base.utils`, the error classes in `~seiscore.base.errors`, and
`~seiscore.base.file_info` provides the standardized ``info`` on a
recording.
"""
