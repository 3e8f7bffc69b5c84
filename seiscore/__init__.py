# Licensed under the GPLv3 - see LICENSE
"""Seismic recording header I/O for Baikal and Sigma data loggers."""
from importlib.metadata import version, PackageNotFoundError

from .formats import file_info, read_header  # noqa
from .recording import Recording, HeaderCache  # noqa

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # Can happen in source checkout.
    __version__ = ''

del version, PackageNotFoundError

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
