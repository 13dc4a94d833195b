# Licensed under the GPLv3 - see LICENSE
"""Base classes for converting records to and from a format's documents.

A serializer turns a value into its portable form, i.e., the object that
the format's encoder writes out (for JSON, something `json` can dump).  A
deserializer wraps a portable form read by the format's decoder and turns
it back into a value.  Both tell whether the format is human readable,
which allows field adaptors to choose a representation.

Records are dataclasses, which are converted field by field.  Fields that
have an adaptor (see `~b64repr.base.record.field`) are converted by it,
fields holding a dataclass type are converted recursively, and all other
fields are passed on to the format as is.
"""
import dataclasses

from .errors import SerializationError, DeserializationError
from .record import get_adaptor


__all__ = ['SerializerBase', 'DeserializerBase']


def _init_fields(record):
    return [fld for fld in dataclasses.fields(record) if fld.init]


def _is_record_type(cls):
    return isinstance(cls, type) and dataclasses.is_dataclass(cls)


class SerializerBase:
    """Converter of values to the portable form of a format.

    Subclasses should define ``is_human_readable`` and ``_make_record``.
    """

    is_human_readable = None
    """Whether the format is textual (`True`) or binary (`False`)."""

    def serialize(self, value):
        """Convert a record or any other value to its portable form."""
        if (dataclasses.is_dataclass(value)
                and not isinstance(value, type)):
            return self.serialize_record(value)

        return self.serialize_native(value)

    def serialize_str(self, value):
        """Portable form of a string."""
        if not isinstance(value, str):
            raise SerializationError(f"expected a string, got {value!r}")
        return value

    def serialize_native(self, value):
        """Portable form of a value, using the format's own conversion."""
        return value

    def serialize_record(self, record):
        """Portable form of a record (an instance of a dataclass)."""
        names = []
        values = []
        for fld in _init_fields(record):
            value = getattr(record, fld.name)
            adaptor = get_adaptor(fld)
            if adaptor is not None:
                value = adaptor.serialize(value, self)
            else:
                value = self.serialize(value)
            names.append(fld.name)
            values.append(value)

        return self._make_record(names, values)

    def _make_record(self, names, values):
        raise NotImplementedError()


class DeserializerBase:
    """Converter of the portable form of a format to values.

    Subclasses should define ``is_human_readable`` and ``_record_values``.

    Parameters
    ----------
    value : object
        Portable form as produced by the format's decoder.
    """

    is_human_readable = None
    """Whether the format is textual (`True`) or binary (`False`)."""

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"{self.__class__.__name__}({self.value!r})"

    def deserialize(self, cls=None):
        """Convert to a record of the given class, or a native value."""
        if _is_record_type(cls):
            return self.deserialize_record(cls)

        return self.deserialize_native()

    def deserialize_str(self):
        """Get a string from the portable form."""
        if not isinstance(self.value, str):
            raise DeserializationError(
                f"invalid type: expected a string, got "
                f"{type(self.value).__name__} {self.value!r}")
        return self.value

    def deserialize_native(self):
        """Get a value from the portable form, using the format's conversion.
        """
        return self.value

    def deserialize_record(self, cls):
        """Create a record from the portable form.

        Parameters
        ----------
        cls : type
            Dataclass to create an instance of.
        """
        flds = _init_fields(cls)
        values = self._record_values([fld.name for fld in flds])
        kwargs = {}
        for fld, value in zip(flds, values):
            item = self.__class__(value)
            adaptor = get_adaptor(fld)
            if adaptor is not None:
                kwargs[fld.name] = adaptor.deserialize(item)
            else:
                kwargs[fld.name] = item.deserialize(fld.type)

        return cls(**kwargs)

    def _record_values(self, names):
        """Portable forms of the fields with the given names, in order."""
        raise NotImplementedError()
