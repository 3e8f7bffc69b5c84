# Licensed under the GPLv3 - see LICENSE
import pathlib
import importlib.metadata

import pytest

from .. import baikal7, baikal8, sigma
from ..formats import (FILE_FORMATS, detect, get_header_class, read_header,
                       file_info)
from ..base.errors import BadFilePath, BadHeaderData


@pytest.mark.parametrize(('name', 'fmt'), [
    ('HF_0019_2019-08-16_08-31-08_90041_527.00', 'baikal7'),
    ('K07_2022-01-20_08-21-05.xx', 'baikal8'),
    ('SigmaN011_2022-01-19_10-06-11.bin', 'sigma'),
    ('/data/2022.01.19/SigmaN011.bin', 'sigma'),
    (pathlib.Path('some/dir/K07.xx'), 'baikal8')])
def test_detect(name, fmt):
    assert detect(name) == fmt


@pytest.mark.parametrize('name', [
    '', 'recording', 'recording.dat', 'recording.XX', 'recording.00.gz',
    '/data/dir.bin/recording', '.bin'])
def test_detect_bad_path(name):
    with pytest.raises(BadFilePath):
        detect(name)


def test_registry_is_immutable():
    assert dict(FILE_FORMATS) == {'00': 'baikal7', 'xx': 'baikal8',
                                  'bin': 'sigma'}
    with pytest.raises(TypeError):
        FILE_FORMATS['dat'] = 'baikal7'


@pytest.mark.parametrize(('fmt', 'cls'), [
    ('baikal7', baikal7.Baikal7Header),
    ('baikal8', baikal8.Baikal8Header),
    ('sigma', sigma.SigmaHeader)])
def test_get_header_class(fmt, cls):
    header_class = get_header_class(fmt)
    assert header_class is cls
    assert header_class.format == fmt
    assert FILE_FORMATS[header_class.extension] == fmt


def test_get_header_class_unknown():
    with pytest.raises(BadFilePath):
        get_header_class('mark5b')


def test_read_header(make_baikal7, make_baikal8, make_sigma):
    assert isinstance(read_header(make_baikal7()), baikal7.Baikal7Header)
    assert isinstance(read_header(make_baikal8()), baikal8.Baikal8Header)
    assert isinstance(read_header(make_sigma()), sigma.SigmaHeader)


@pytest.mark.parametrize('maker', ['make_baikal7', 'make_baikal8',
                                   'make_sigma'])
def test_read_header_bad_nchan(request, maker):
    name = request.getfixturevalue(maker)(nchan=2)
    with pytest.raises(BadHeaderData):
        read_header(name)
    header = read_header(name, verify=False)
    assert header.nchan == 2


def test_read_header_wrong_extension(make_sigma):
    with pytest.raises(BadFilePath):
        read_header(make_sigma(name='sample.dat'))


def test_file_info(make_sigma):
    info = file_info(make_sigma(), resample_frequency=100)
    assert info
    assert info.format == 'sigma'


def test_version():
    import seiscore
    try:
        expected = importlib.metadata.version('seiscore')
    except importlib.metadata.PackageNotFoundError:
        expected = ''
    assert seiscore.__version__ == expected
