# This file is used to configure the behavior of pytest, and to provide
# factories of synthetic recordings for the tests.
import os
import struct

import numpy as np
import pytest

try:
    from pytest_astropy_header.display import (PYTEST_HEADER_MODULES,
                                               TESTED_VERSIONS)
except ImportError:
    pass
else:
    def pytest_configure(config):

        config.option.astropy_header = True

        # Customize the following lines to add/remove entries from the list of
        # packages for which version numbers are displayed when running the
        # tests.
        PYTEST_HEADER_MODULES.clear()
        PYTEST_HEADER_MODULES['Astropy'] = 'astropy'
        PYTEST_HEADER_MODULES['Numpy'] = 'numpy'

        from . import __version__

        packagename = os.path.basename(os.path.dirname(__file__))
        TESTED_VERSIONS[packagename] = __version__ or 'from source'


# Bytes preceding the samples; kept literal so the tests do not depend on
# the constant they check.
HEADER_NBYTES = 336


def _write(path, fields, nsamples, samples=None):
    header = bytearray(HEADER_NBYTES)
    for offset, fmt, values in fields:
        struct.pack_into('<' + fmt, header, offset, *values)
    if samples is None:
        samples = np.arange(nsamples * 3, dtype='<i4').reshape(-1, 3)
    with open(path, 'wb') as fw:
        fw.write(bytes(header))
        fw.write(np.asarray(samples, dtype='<i4').tobytes())
    return str(path)


@pytest.fixture
def make_baikal7(tmp_path):
    """Factory of Baikal-7 files, with three components counting up."""
    def make(name='sample.00', nchan=3, frequency=100,
             coordinates=(50.12345, 30.54321), time_begin=0,
             nsamples=1000, samples=None):
        fields = [(0, 'H', (nchan,)),
                  (22, 'H', (frequency,)),
                  (72, '2d', coordinates),  # latitude, longitude
                  (104, 'Q', (time_begin,))]
        return _write(tmp_path / name, fields, nsamples, samples)

    return make


@pytest.fixture
def make_baikal8(tmp_path):
    """Factory of Baikal-8 files, with three components counting up."""
    def make(name='sample.xx', nchan=3, date=(20, 1, 2022),
             sampling_interval=0.001, seconds=30305.25,
             coordinates=(37.61234, 55.75321), nsamples=1000, samples=None):
        fields = [(0, 'H', (nchan,)),
                  (6, '3H', date),  # day, month, year
                  (48, '2d', (sampling_interval, seconds)),
                  (72, '2d', coordinates)]  # longitude, latitude
        return _write(tmp_path / name, fields, nsamples, samples)

    return make


@pytest.fixture
def make_sigma(tmp_path):
    """Factory of Sigma files, with three components counting up."""
    def make(name='sample.bin', nchan=3, frequency=1000,
             latitude=b'5530.50N', longitude=b'03730.50E',
             date=220119, time=100611, nsamples=1000, samples=None):
        fields = [(12, 'H', (nchan,)),
                  (24, 'H', (frequency,)),
                  (40, '8s', (latitude,)),
                  (48, '9s', (longitude,)),
                  (60, '2I', (date, time))]
        return _write(tmp_path / name, fields, nsamples, samples)

    return make
