# Licensed under the GPLv3 - see LICENSE
"""
Base definitions for seismic recording headers.

Defines helpers to construct a Header class that holds the raw bytes of a
recording header, and provides access to the values encoded at fixed
offsets therein via a dict-like interface.  Definitions for headers are
constructed using a HeaderParser class, whose values describe the offset,
kind and number of elements of each keyword.
"""
import astropy.units as u
from astropy.utils import classproperty

from .fields import field_nbytes, unpack_field
from .errors import BadHeaderData


__all__ = ['NCHAN', 'make_parser', 'get_extent',
           'ParserDict', 'HeaderParser', 'SeismicHeaderBase']


NCHAN = 3
"""Number of channels (components Z, X, Y) recorded by all loggers."""


def make_parser(offset, kind, count=1):
    """Construct a function that decodes a field from header bytes.

    Parameters
    ----------
    offset : int
        Byte offset of the field.
    kind : str
        Field kind, one of those in `~seiscore.base.fields.FIELD_KINDS`.
    count : int
        Number of elements in the field.

    Returns
    -------
    parser : function
        To be used as ``parser(words)``, with ``words`` the header bytes.
    """
    def parser(words):
        return unpack_field(words, offset, kind, count)

    return parser


def get_extent(offset, kind, count=1):
    """Return the byte offset just beyond the end of a header keyword."""
    return offset + field_nbytes(kind, count)


class ParserDict:
    """Create a lazily evaluated dictionary of parsers or extents.

    Implemented as a non-data descriptor.  When first called on an instance,
    it will create a dict under the name of itself in the instance's
    ``__dict__``, which means that any further attribute access will return
    that dict instead of this descriptor.

    Parameters
    ----------
    function : callable
        Function that creates a parser or gets the extent, based on a header
        keyword description.  Typically ``make_parser`` or ``get_extent``.
    """

    def __init__(self, function):
        self.function = function

    def __set_name__(self, owner, name):
        self.name = name
        self.__doc__ = f"Lazily evaluated dict of {name}"

    def __get__(self, instance, cls=None):
        if instance is None:
            return self
        d = {key: self.function(*definition)
             for key, definition in instance.items()}
        setattr(instance, self.name, d)
        return d

    def __repr__(self):
        return f"{self.__class__.__name__}({self.function})"


class HeaderParser(dict):
    """Parser for header keywords.

    A dictionary of header keywords, with values that describe how they are
    encoded in a given header.  Initialisation is as a normal dict,
    with (ordered) key, value pairs, with each value a tuple containing:

    offset : int
        Byte offset of the field for this key.
    kind : str
        Kind of the elements, e.g., 'uint16' or 'double'.
    count : int, optional
        Number of elements.  Default: 1.

    The class provides dict-like properties ``parsers`` and ``extents``,
    which give functions that get a given keyword from the header bytes,
    and the byte offsets just past each keyword.  Both are calculated on
    first access, so a parser should not be changed once it is in use.
    """
    parsers = ParserDict(make_parser)
    extents = ParserDict(get_extent)

    @property
    def nbytes(self):
        """Number of bytes needed to decode all keywords."""
        return max(self.extents.values(), default=0)


class SeismicHeaderBase:
    """Base class for all recording headers.

    Generally, the actual class should define:

      _header_parser : `HeaderParser` instance corresponding to this class.

      format : name of the format.

      extension : file name extension used for the format.

      time_offset : correction to add to the header time to get the
          actual time of the first sample.  Default: 0 s.

    And it should define properties ``frequency``, ``time`` and
    ``coordinate``, which give the sampling frequency in Hz, the time of
    the first sample, and the location of the logger.

    Parameters
    ----------
    words : bytes
        Header bytes, starting at the beginning of the file.
    verify : bool, optional
        Whether to check that all header values can be decoded and are
        valid.  Default: `True`.
    """

    _header_parser = HeaderParser()
    format = None
    extension = None
    time_offset = 0 * u.s

    _properties = ('frequency', 'time', 'coordinate')
    """Normalized properties, checked in order during verification."""

    def __init__(self, words, verify=True):
        self.words = bytes(words)
        if verify:
            self.verify()

    def verify(self):
        """Verify header integrity.

        Checks that the number of channels is the three components recorded,
        and that all normalized properties can be decoded.

        Raises
        ------
        BadHeaderData
            If any check fails.
        EOFError
            If the header is shorter than needed.
        """
        if len(self.words) < self.nbytes:
            raise EOFError(f"{self.__class__.__name__} needs {self.nbytes} "
                           f"bytes, got {len(self.words)}.")
        if self.nchan != NCHAN:
            raise BadHeaderData(f"invalid number of channels {self.nchan}; "
                                f"should be {NCHAN}.")
        for prop in self._properties:
            getattr(self, prop)

    @classproperty
    def nbytes(cls):
        """Number of header bytes decoded."""
        return cls._header_parser.nbytes

    @classmethod
    def fromfile(cls, fh, verify=True):
        """Read header from the start of a binary filehandle.

        Arguments are the same as for class initialisation.
        """
        fh.seek(0)
        s = fh.read(cls.nbytes)
        if len(s) != cls.nbytes:
            raise EOFError(f"file too short for a {cls.format} header: "
                           f"got {len(s)} of {cls.nbytes} bytes.")
        return cls(s, verify=verify)

    @classmethod
    def fromname(cls, name, verify=True):
        """Read header from the file with the given name.

        The file is opened and closed again before returning.
        """
        with open(name, 'rb') as fh:
            return cls.fromfile(fh, verify=verify)

    @property
    def nchan(self):
        """Number of channels."""
        return self['nchan']

    def __getitem__(self, item):
        """Get the value of a particular header item from the header bytes."""
        try:
            parser = self._header_parser.parsers[item]
        except KeyError:
            raise KeyError(f"{self.__class__.__name__} header does not "
                           f"contain {item}") from None
        return parser(self.words)

    def keys(self):
        """All keys defined for this header."""
        return self._header_parser.keys()

    def _ipython_key_completions_(self):
        # Enables tab-completion of header keys in IPython.
        return self.keys()

    def __contains__(self, key):
        return key in self.keys()

    def __eq__(self, other):
        return (type(self) is type(other)
                and self.words[:self.nbytes] == other.words[:other.nbytes])

    def __repr__(self):
        name = self.__class__.__name__
        outs = [f"{k}: {self[k]}" for k in self.keys()]
        return "<{} {}>".format(name, (",\n  " + " "*len(name)).join(outs))
