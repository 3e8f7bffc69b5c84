# Licensed under the GPLv3 - see LICENSE
"""Provide a base class for "info" properties.

Loosely based on `~astropy.utils.data_info.DataInfo`.
"""
import copy
import operator

from astropy import units as u
from astropy.time import Time


__all__ = ['info_item', 'InfoBase', 'RecordingInfo', 'format_duration']


def format_duration(seconds):
    """Format a duration as ``[N days ]HH:MM:SS``, dropping fractions."""
    minutes, seconds = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    duration = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days > 0:
        duration = f"{days} days " + duration
    return duration


class info_item:
    """Lazily evaluated item of an info container.

    Used as a decorator, with the function calculating the value from the
    info instance, or as a plain class attribute linking to an attribute
    of the same name on ``source``.  The value is stored on the instance,
    so it is evaluated only once.  If the evaluation raises, the exception
    is stored in the instance's ``errors`` dict and ``default`` is used.

    Parameters
    ----------
    needs : str or tuple of str
        Attributes of the info instance that should not be `None` for the
        value to be calculated.  If any is, ``default`` is used.
    source : str, optional
        Attribute holding the object to take the value from, e.g.,
        '_parent' or 'header'.  Implies it is needed.
    default : value, optional
        The value used if the needs are not met.  Default: `None`.
    doc : str, optional
        Docstring.  By default, taken from the decorated function.
    copy : bool
        Whether to store a copy of the value, e.g., to give each instance
        an independent `dict`.
    """
    fget = None

    def __init__(self, *, needs=(), source=None, default=None, doc=None,
                 copy=False):
        needs = (needs,) if isinstance(needs, str) else tuple(needs)
        if source is not None:
            needs += (source,)
        self.needs = needs
        self.source = source
        self.default = default
        self.copy = copy
        if doc:
            self.__doc__ = doc

    def __set_name__(self, owner, name):
        self.name = name
        if self.fget is None and self.source is not None:
            link = f"{self.source}.{name}"
            self.fget = operator.attrgetter(link)
            if '__doc__' not in vars(self):
                self.__doc__ = "Link to " + link.replace('_parent', 'parent')

    def __call__(self, fget):
        if self.fget is not None:
            raise TypeError(f"info_item {self.name!r} is not callable.")
        self.fget = fget
        if '__doc__' not in vars(self):
            self.__doc__ = fget.__doc__
        return self

    def __get__(self, instance, cls=None):
        if instance is None:
            return self

        value = self.default
        if self.fget and all(getattr(instance, need, None) is not None
                             for need in self.needs):
            try:
                result = self.fget(instance)
            except Exception as exc:
                instance.errors[self.name] = exc
            else:
                if result is not None:
                    value = result

        if self.copy:
            value = copy.copy(value)

        setattr(instance, self.name, value)
        return value

    def __str__(self):
        short_doc = (self.__doc__ or '').split('\n')[0]
        return f"{self.name}: {short_doc}"

    def __repr__(self):
        extra = ', '.join(f"{attr}={getattr(self, attr)!r}"
                          for attr in ('needs', 'default', 'copy')
                          if getattr(self, attr))
        return f"<info_item {self}{' (' + extra + ')' if extra else ''}>"


class InfoBase:
    """Container providing a standardized interface to file information.

    In order to ensure that information is always returned, all access
    to the parent should be via `~seiscore.base.file_info.info_item`,
    which ensures that any errors are stored in ``self.errors``.

    The instance evaluates as `True` if the underlying file is of the right
    format, and its header could be decoded.

    Parameters
    ----------
    parent : instance, optional
        Instance of the recording the ``info`` instance is attached to.
        `None` if it is the class version.
    """

    attr_names = ()
    """Attributes that the container provides."""

    _parent = None

    def __init__(self, parent=None):
        if parent is not None:
            self._parent = parent
            for attr in self.attr_names:
                getattr(self, attr)

    def __get__(self, instance, owner_cls):
        if instance is None:
            # Unbound descriptor, nothing to do.
            return self

        # Always start from scratch, since the file may have changed.
        return self.__class__(parent=instance)

    def __bool__(self):
        return self.format is not None and self.header is not None

    def __call__(self):
        """Create a dict with file information.

        This includes information about possible warnings and errors.
        """
        info = {}
        for attr in self.attr_names:
            value = getattr(self, attr)
            if not (value is None or (isinstance(value, dict)
                                      and value == {})):
                info[attr] = value

        return info

    def __repr__(self):
        # Use the repr for display of file information.
        if self._parent is None:
            return '\n'.join(
                [f"{self.__class__.__name__} (unbound) with attributes:"]
                + [f"  {getattr(self.__class__, attr)}"
                   for attr in self.attr_names])

        result = [self._parent.__class__.__name__ + ' information:']
        for attr in self.attr_names:
            value = getattr(self, attr)
            if isinstance(value, dict):
                prefix = f"\n{attr}: "
                spaces = ' ' * (len(attr)+2)
                for key, val in value.items():
                    str_val = str(val) or repr(val)
                    result.append(f"{prefix} {key}: {str_val}")
                    prefix = spaces

            elif value is not None:
                if isinstance(value, Time):
                    value = Time(value, format='isot', precision=9)
                result.append(f"{attr} = {value}")

        if not self:
            result.append('\nNot parsable. Wrong format?')

        return '\n'.join(result)


class RecordingInfo(InfoBase):
    """Standardized information on recordings.

    The ``info`` descriptor has a number of standard attributes, which are
    determined from the file name, from the header, and from the file size.

    Examples
    --------
    The most common use is simply to print information::

        >>> from seiscore import Recording
        >>> Recording('SigmaN011_2022-01-19_10-06-11.bin').info
        ... # doctest: +SKIP
        Recording information:
        path = SigmaN011_2022-01-19_10-06-11.bin
        name = SigmaN011_2022-01-19_10-06-11.bin
        format = sigma
        frequency = 1000 Hz
        start_time = 2022-01-19T10:06:13.000000000
        stop_time = 2022-01-19T11:06:13.000000000
        coordinate = (longitude=37.50833, latitude=55.50833)
        number_of_samples = 3600000
        duration = 3600.0 s
        formatted_duration = 01:00:00
    """
    attr_names = ('path', 'name', 'format', 'frequency', 'start_time',
                  'stop_time', 'coordinate', 'number_of_samples',
                  'duration', 'formatted_duration', 'errors', 'warnings')
    """Attributes that the container provides."""

    path = info_item(source='_parent', doc='Name of the recording file.')
    format = info_item(source='_parent', doc=(
        "The file format, from the file name extension."))
    coordinate = info_item(source='header', doc='Location of the logger.')

    errors = info_item(default={}, copy=True,
                       doc='dict of attributes that raised errors.')
    warnings = info_item(default={}, copy=True,
                         doc='dict of attributes that gave warnings.')

    @info_item(needs='path')
    def name(self):
        """Base name of the recording file."""
        return self._parent.name

    @info_item(needs='format')
    def header(self):
        """Decoded header of the recording."""
        return self._parent.header

    @info_item(needs='header')
    def start_time(self):
        """Time of the first sample, including any clock correction."""
        return self._parent.start_time

    @info_item(needs='header')
    def number_of_samples(self):
        """Number of complete samples of each component in the file."""
        remainder = self._parent.file_size_remainder
        if remainder:
            self.warnings['number_of_samples'] = (
                f"file contains {remainder} bytes beyond the last "
                f"complete sample.")
        return self._parent.number_of_samples

    @info_item(needs='header')
    def frequency(self):
        """Sampling frequency."""
        return self.header.frequency * u.Hz

    @info_item(needs=('start_time', 'number_of_samples'))
    def stop_time(self):
        """Time just after the last sample."""
        return self._parent.stop_time

    @info_item(needs=('start_time', 'stop_time'))
    def duration(self):
        """Time covered by the recording."""
        return (self.stop_time - self.start_time).to(u.s)

    @info_item(needs='duration')
    def formatted_duration(self):
        """Duration as days, hours, minutes and seconds."""
        return format_duration(self.duration.to_value(u.s))
