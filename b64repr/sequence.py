# Licensed under the GPLv3 - see LICENSE
"""Adaptors that convert sequences of plain-data elements to base64 text.

The bytes underlying the elements are written as URL-safe base64 text,
which keeps binary data, such as samples in an array, exact in textual
formats like JSON.  For formats that are not human readable, one can use
`Base64IfReadable`, which leaves the value to the format's native conversion.
"""
from . import codec
from .base.errors import SerializationError, DeserializationError
from .containers import as_container
from .pod import byte_view, from_bytes


__all__ = ['Base64', 'Base64IfReadable']


class Base64:
    """Field adaptor converting a sequence of elements to base64 text.

    Parameters
    ----------
    container : `~b64repr.containers.ContainerBase`, dtype-like, or None
        Describes the field value.  A dtype is taken to mean a
        `~b64repr.containers.Vector` of elements of that type.
        Default: `~b64repr.containers.Bytes`.
    padding : bool, optional
        Whether the base64 text is padded with ``=``.  Text is decoded only
        if padded the same way.  Default: taken from the class attribute.

    Examples
    --------
    Use it for the field of a record::

        @dataclasses.dataclass
        class Frame:
            samples: np.ndarray = field(adaptor=Base64(Vector('<i2')))
    """

    padding = True
    """Default for padding of the base64 text."""

    def __init__(self, container=None, *, padding=None):
        self.container = as_container(container)
        if padding is not None:
            self.padding = padding

    def __repr__(self):
        return (f"{self.__class__.__name__}({self.container!r}, "
                f"padding={self.padding})")

    def encode(self, value):
        """Base64 text of the bytes underlying the value's elements."""
        try:
            elements = self.container.elements(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise SerializationError(
                f"cannot convert {value!r} using {self.container!r}: {exc}"
            ) from exc

        return codec.encode(byte_view(elements), padding=self.padding)

    def decode(self, text):
        """Create a value from base64 text holding its elements' bytes."""
        try:
            data = codec.decode(text, padding=self.padding)
        except ValueError as exc:
            raise DeserializationError(
                f"{text!r} is not valid base64: {exc}") from exc

        try:
            elements = from_bytes(data, self.container.dtype)
        except ValueError as exc:
            raise DeserializationError(str(exc)) from exc

        try:
            return self.container.from_elements(elements)
        except (TypeError, ValueError) as exc:
            raise DeserializationError(str(exc)) from exc

    def serialize(self, value, serializer):
        return serializer.serialize_str(self.encode(value))

    def deserialize(self, deserializer):
        return self.decode(deserializer.deserialize_str())


class Base64IfReadable(Base64):
    """Field adaptor converting elements to base64 for human-readable formats.

    For binary formats, the field value is converted natively, exactly as if
    no adaptor were used, thus avoiding the size overhead of base64.

    Parameters are as for `Base64`.
    """

    def serialize(self, value, serializer):
        if serializer.is_human_readable:
            return super().serialize(value, serializer)

        try:
            native = self.container.to_native(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise SerializationError(
                f"cannot convert {value!r} using {self.container!r}: {exc}"
            ) from exc

        return serializer.serialize_native(native)

    def deserialize(self, deserializer):
        if deserializer.is_human_readable:
            return super().deserialize(deserializer)

        try:
            return self.container.from_native(
                deserializer.deserialize_native())
        except DeserializationError:
            raise
        except (TypeError, ValueError, OverflowError) as exc:
            raise DeserializationError(str(exc)) from exc
