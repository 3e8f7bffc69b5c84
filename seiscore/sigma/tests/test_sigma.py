# Licensed under the GPLv3 - see LICENSE
import pytest
import astropy.units as u
from astropy.time import Time

from ... import sigma
from ...base.errors import BadHeaderData


class TestSigma:
    def test_header(self, make_sigma):
        name = make_sigma()
        header = sigma.SigmaHeader.fromname(name)
        assert header.nbytes == 68
        assert header.format == 'sigma'
        assert header.extension == 'bin'
        assert header.nchan == 3
        assert header['frequency'] == header.frequency == 1000
        assert header['latitude'] == '5530.50N'
        assert header['longitude'] == '03730.50E'
        assert header['date'] == 220119
        assert header['time'] == 100611
        assert header.coordinate == (37.50833, 55.50833)
        # The header time does not include the clock bias.
        assert abs(header.time - Time('2022-01-19T10:06:11')) < 1 * u.ns
        assert header.time_offset == sigma.SIGMA_SECONDS_OFFSET == 2 * u.s

    @pytest.mark.parametrize(('latitude', 'longitude', 'expected'), [
        (b'5530.50S', b'03730.50W', (-37.50833, -55.50833)),
        (b'0000.00N', b'18000.00E', (180., 0.)),
        (b'4559.99N', b'12959.99W', (-129.99983, 45.99983))])
    def test_coordinates(self, make_sigma, latitude, longitude, expected):
        name = make_sigma(latitude=latitude, longitude=longitude)
        header = sigma.SigmaHeader.fromname(name)
        assert header.coordinate == expected

    @pytest.mark.parametrize(('latitude', 'longitude', 'match'), [
        (b'5530.50X', b'03730.50E', 'N, S'),
        (b'5530.50N', b'03730.50N', 'E, W'),
        (b'5530.50N', b'0373050E\x00', 'E, W'),
        (b'5530.50N', b'037a0.50E', 'degrees and minutes'),
        (b'5530.50N', b'037 inf E', 'degrees and minutes'),
        (b'55nan  N', b'03730.50E', 'degrees and minutes'),
        (b'5560.00N', b'03730.50E', 'less than 60'),
        (b'\x00' * 8, b'03730.50E', 'N, S')])
    def test_bad_coordinates(self, make_sigma, latitude, longitude, match):
        name = make_sigma(latitude=latitude, longitude=longitude)
        with pytest.raises(BadHeaderData, match=match):
            sigma.SigmaHeader.fromname(name)

    @pytest.mark.parametrize(('date', 'time', 'expected'), [
        (240229, 0, '2024-02-29T00:00:00'),
        (991231, 235959, '2099-12-31T23:59:59'),
        (100101, 5, '2010-01-01T00:00:05')])
    def test_time(self, make_sigma, date, time, expected):
        name = make_sigma(date=date, time=time)
        header = sigma.SigmaHeader.fromname(name)
        assert abs(header.time - Time(expected)) < 1 * u.ns

    @pytest.mark.parametrize(('date', 'time', 'match'), [
        (220231, 100611, 'day'),
        (230229, 100611, 'day'),
        (221301, 100611, 'month'),
        (50119, 100611, 'date'),
        (220119, 240000, 'hours'),
        (220119, 236000, 'minutes'),
        (220119, 235960, 'seconds'),
        (220119, 1000000, 'time')])
    def test_bad_time(self, make_sigma, date, time, match):
        name = make_sigma(date=date, time=time)
        with pytest.raises(BadHeaderData, match=match):
            sigma.SigmaHeader.fromname(name)
        # Without verification, the header can still be read.
        header = sigma.SigmaHeader.fromname(name, verify=False)
        assert header['date'] == date
        with pytest.raises(BadHeaderData, match=match):
            header.time

    def test_date_checked_before_time(self, make_sigma):
        name = make_sigma(date=220231, time=240000)
        with pytest.raises(BadHeaderData, match='day'):
            sigma.SigmaHeader.fromname(name)

    @pytest.mark.parametrize('nchan', (0, 1, 2, 4))
    def test_bad_nchan(self, make_sigma, nchan):
        name = make_sigma(nchan=nchan, date=220231, latitude=b'xxxxxxxx')
        with pytest.raises(BadHeaderData, match='channels'):
            sigma.SigmaHeader.fromname(name)
