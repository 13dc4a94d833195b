# Licensed under the GPLv3 - see LICENSE
"""Conversion of records to and from JSON documents.

Records become JSON objects keyed by field name.  Fields without an adaptor
are written with astropy's `~astropy.utils.misc.JsonCustomEncoder`, so that
numpy scalars and arrays, and astropy quantities, can be written too
(though they are read back as plain numbers, lists and dicts).
"""
import json

from astropy.utils.misc import JsonCustomEncoder

from ..base.errors import DeserializationError
from ..base.format import SerializerBase, DeserializerBase


__all__ = ['JSONSerializer', 'JSONDeserializer', 'dumps', 'loads']


class JSONSerializer(SerializerBase):
    """Converter of records to objects `json` can write."""

    is_human_readable = True

    def _make_record(self, names, values):
        return dict(zip(names, values))


class JSONDeserializer(DeserializerBase):
    """Converter of objects read by `json` to records."""

    is_human_readable = True

    def _record_values(self, names):
        if not isinstance(self.value, dict):
            raise DeserializationError(
                f"invalid type: expected an object, got "
                f"{type(self.value).__name__}")

        missing = [name for name in names if name not in self.value]
        if missing:
            raise DeserializationError(f"missing fields {missing}")

        unknown = set(self.value).difference(names)
        if unknown:
            raise DeserializationError(f"unknown fields {sorted(unknown)}")

        return [self.value[name] for name in names]


def dumps(obj, **kwargs):
    """Write a record (or other value) as a JSON string.

    Parameters
    ----------
    obj : object
        Typically an instance of a dataclass.
    **kwargs
        Further arguments for `json.dumps`, such as ``indent``.
    """
    kwargs.setdefault('cls', JsonCustomEncoder)
    return json.dumps(JSONSerializer().serialize(obj), **kwargs)


def loads(data, cls=None):
    """Read a record (or other value) from a JSON string.

    Parameters
    ----------
    data : str or bytes
        JSON document.
    cls : type, optional
        Dataclass of the record.  If not given, the decoded JSON is
        returned as is.

    Raises
    ------
    DeserializationError
        If the document is not valid JSON or does not represent the record.
    """
    try:
        value = json.loads(data)
    except ValueError as exc:
        raise DeserializationError(f"invalid JSON: {exc}") from exc

    return JSONDeserializer(value).deserialize(cls)
