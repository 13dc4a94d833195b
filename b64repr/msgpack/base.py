# Licensed under the GPLv3 - see LICENSE
"""Conversion of records to and from MessagePack.

Records become MessagePack arrays holding the fields in order of definition,
and `bytes` are stored as MessagePack ``bin``, so the format is compact.
Since it is binary, adaptors like `~b64repr.sequence.Base64IfReadable`
leave values to the native conversion, which turns numpy arrays and scalars
into lists and Python scalars.
"""
import msgpack
import numpy as np

from ..base.errors import SerializationError, DeserializationError
from ..base.format import SerializerBase, DeserializerBase


__all__ = ['MsgpackSerializer', 'MsgpackDeserializer', 'dumps', 'loads']


class MsgpackSerializer(SerializerBase):
    """Converter of records to objects `msgpack` can pack."""

    is_human_readable = False

    def serialize_native(self, value):
        if isinstance(value, (np.ndarray, np.generic)):
            return value.tolist()
        return value

    def _make_record(self, names, values):
        return list(values)


class MsgpackDeserializer(DeserializerBase):
    """Converter of objects unpacked by `msgpack` to records."""

    is_human_readable = False

    def _record_values(self, names):
        if not isinstance(self.value, list):
            raise DeserializationError(
                f"invalid type: expected an array, got "
                f"{type(self.value).__name__}")

        if len(self.value) != len(names):
            raise DeserializationError(
                f"invalid length {len(self.value)}, expected "
                f"{len(names)} fields")

        return self.value


def dumps(obj):
    """Pack a record (or other value) as MessagePack bytes."""
    try:
        return msgpack.packb(MsgpackSerializer().serialize(obj),
                             use_bin_type=True)
    except TypeError as exc:
        raise SerializationError(str(exc)) from exc


def loads(data, cls=None):
    """Unpack a record (or other value) from MessagePack bytes.

    Parameters
    ----------
    data : bytes
        Packed data.
    cls : type, optional
        Dataclass of the record.  If not given, the unpacked value is
        returned as is.

    Raises
    ------
    DeserializationError
        If the data cannot be unpacked or do not represent the record.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DeserializationError(
            f"invalid type: expected bytes, got {type(data).__name__}")

    try:
        value = msgpack.unpackb(data, raw=False)
    except (ValueError, msgpack.exceptions.UnpackException) as exc:
        raise DeserializationError(f"invalid MessagePack: {exc}") from exc

    return MsgpackDeserializer(value).deserialize(cls)
