# Licensed under the GPLv3 - see LICENSE
"""Round trips of records through textual and binary formats."""
import dataclasses
import json

import pytest
import numpy as np

from .. import io as bio
from ..base import field, DeserializationError
from ..containers import Array, Vector, BoundedVector, List
from ..sequence import Base64, Base64IfReadable
from ..text import Base64String


@dataclasses.dataclass(eq=False)
class BytesRecord:
    byte_array: np.ndarray = field(adaptor=Base64(Array('u1', 2)))
    data: bytes = field(adaptor=Base64())
    byte_array2: np.ndarray = field(adaptor=Base64IfReadable(Array('u1', 2)))
    data2: bytes = field(adaptor=Base64IfReadable())


@dataclasses.dataclass(eq=False)
class NumbersRecord:
    number_array: np.ndarray = field(adaptor=Base64(Array('u8', 2)))
    numbers: np.ndarray = field(adaptor=Base64(Vector('i8')))
    number_array2: np.ndarray = field(
        adaptor=Base64IfReadable(Array('u8', 2)))
    numbers2: np.ndarray = field(adaptor=Base64IfReadable(Vector('i8')))


@dataclasses.dataclass
class StringRecord:
    string: str = field(adaptor=Base64String())


@dataclasses.dataclass(eq=False)
class MixedRecord:
    name: str
    samples: np.ndarray = field(adaptor=Base64IfReadable(Vector('<c8')))
    flags: list = field(adaptor=Base64(List('<u2')))
    small: np.ndarray = field(
        adaptor=Base64IfReadable(BoundedVector('f8', 4)))
    inner: StringRecord = None


def assert_records_equal(a, b):
    assert type(a) is type(b)
    for fld in dataclasses.fields(a):
        va = getattr(a, fld.name)
        vb = getattr(b, fld.name)
        assert type(va) is type(vb)
        if isinstance(va, np.ndarray):
            assert va.dtype == vb.dtype
            assert va.shape == vb.shape
            assert va.tobytes() == vb.tobytes()
        else:
            assert va == vb


def assert_round_trips(record):
    for fmt in ('json', 'msgpack'):
        data = bio.dumps(record, fmt)
        assert_records_equal(bio.loads(data, type(record), fmt), record)


class TestRoundTrip:
    def test_string(self):
        assert_round_trips(StringRecord('Hello, World'))

    def test_bytes(self):
        assert_round_trips(BytesRecord(
            byte_array=np.array([123, 74], 'u1'),
            data=bytes([1, 23, 14, 51, 125]),
            byte_array2=np.array([123, 12], 'u1'),
            data2=bytes([123, 12, 84, 2])))

    def test_numbers(self):
        assert_round_trips(NumbersRecord(
            number_array=np.array([123, 74], 'u8'),
            numbers=np.array([1, 23, 14, 51, 125], 'i8'),
            number_array2=np.array([123, 12], 'u8'),
            numbers2=np.array([123, 12, 84, 2], 'i8')))

    def test_mixed(self):
        assert_round_trips(MixedRecord(
            name='test',
            samples=np.array([1+2j, -0.5j], '<c8'),
            flags=[1, 65535],
            small=np.array([np.pi, -np.inf, np.nan]),
            inner=StringRecord('Grüße')))

    def test_empty(self):
        assert_round_trips(BytesRecord(
            byte_array=np.array([0, 0], 'u1'),
            data=b'',
            byte_array2=np.array([1, 2], 'u1'),
            data2=b''))
        assert_round_trips(NumbersRecord(
            number_array=np.array([0, 0], 'u8'),
            numbers=np.array([], 'i8'),
            number_array2=np.array([1, 2], 'u8'),
            numbers2=np.array([], 'i8')))


class TestFormatDiscrimination:
    def setup_method(self):
        self.record = NumbersRecord(
            number_array=np.array([123, 74], 'u8'),
            numbers=np.array([1, 23, 14, 51, 125], 'i8'),
            number_array2=np.array([123, 12], 'u8'),
            numbers2=np.array([123, 12, 84, 2], 'i8'))

    def test_json_is_all_text(self):
        document = json.loads(bio.dumps(self.record, 'json'))
        assert all(isinstance(value, str) for value in document.values())
        assert document['numbers2'] == Base64(Vector('i8')).encode(
            self.record.numbers2)

    def test_msgpack_native_only_if_readable(self):
        document = bio.msgpack.loads(bio.dumps(self.record, 'msgpack'))
        assert isinstance(document[0], str)
        assert isinstance(document[1], str)
        assert document[2] == [123, 12]
        assert document[3] == [123, 12, 84, 2]

    def test_same_as_plain_field(self):
        @dataclasses.dataclass
        class Plain:
            values: list
            data: bytes

        @dataclasses.dataclass(eq=False)
        class Adapted:
            values: np.ndarray = field(
                adaptor=Base64IfReadable(Vector('u1')))
            data: bytes = field(adaptor=Base64IfReadable())

        plain = Plain([123, 12, 84, 2], b'{\x0cT\x02')
        adapted = Adapted(np.array([123, 12, 84, 2], 'u1'), b'{\x0cT\x02')
        packed = bio.dumps(adapted, 'msgpack')
        assert packed == bio.dumps(plain, 'msgpack')
        assert_records_equal(bio.loads(packed, Adapted, 'msgpack'), adapted)
        # But for JSON, base64 is used.
        document = json.loads(bio.dumps(adapted, 'json'))
        assert document == {'values': 'ewxUAg==', 'data': 'ewxUAg=='}


class TestMalformed:
    def setup_method(self):
        self.records = {
            BytesRecord: BytesRecord(
                byte_array=np.array([123, 74], 'u1'),
                data=b'\x01',
                byte_array2=np.array([123, 12], 'u1'),
                data2=b'\x02'),
            NumbersRecord: NumbersRecord(
                number_array=np.array([123, 74], 'u8'),
                numbers=np.array([1], 'i8'),
                number_array2=np.array([123, 12], 'u8'),
                numbers2=np.array([2], 'i8'))}

    @pytest.mark.parametrize(('cls', 'name'),
                             [(BytesRecord, 'byte_array'),
                              (BytesRecord, 'data'),
                              (BytesRecord, 'byte_array2'),
                              (BytesRecord, 'data2'),
                              (NumbersRecord, 'numbers'),
                              (NumbersRecord, 'numbers2')])
    def test_sequence_fields(self, cls, name):
        document = json.loads(bio.dumps(self.records[cls], 'json'))
        document[name] = '!!!not-base64!!!'
        with pytest.raises(DeserializationError,
                           match="'!!!not-base64!!!' is not valid base64"):
            bio.loads(json.dumps(document), cls, 'json')

    @pytest.mark.parametrize('fmt', ['json', 'msgpack'])
    def test_string_field(self, fmt):
        # Base64String also uses text for binary formats.
        document = {'string': '!!!not-base64!!!'}
        if fmt == 'msgpack':
            document = list(document.values())
        data = getattr(bio, fmt).dumps(document)
        with pytest.raises(DeserializationError,
                           match="'!!!not-base64!!!' is not valid base64"):
            bio.loads(data, StringRecord, fmt)

    def test_length_mismatch(self):
        document = json.loads(bio.dumps(self.records[NumbersRecord], 'json'))
        document['number_array'] = 'AAAAAAAAAA=='
        with pytest.raises(DeserializationError,
                           match='cannot interpret 7 bytes'):
            bio.loads(json.dumps(document), NumbersRecord, 'json')

    def test_wrong_element_count(self):
        document = json.loads(bio.dumps(self.records[NumbersRecord], 'json'))
        document['number_array'] = document['numbers']
        with pytest.raises(DeserializationError,
                           match='expected an array of 2 elements, got 1'):
            bio.loads(json.dumps(document), NumbersRecord, 'json')
