# Licensed under the GPLv3 - see LICENSE
"""Adaptor that writes strings as base64 text of their UTF-8 encoding."""
from . import codec
from .base.errors import SerializationError, DeserializationError


__all__ = ['Base64String']


class Base64String:
    """Field adaptor that obscures a string as base64 of its UTF-8 bytes.

    The base64 text is used for all formats, human readable or not.

    Parameters
    ----------
    str_type : callable, optional
        Used to create the field value from the decoded `str`.  Should
        raise `ValueError` or `TypeError` if the string is not acceptable.
        Field values must be `str` instances (subclasses are fine).
        Default: `str`.
    padding : bool, optional
        Whether the base64 text is padded with ``=``.  Default: `True`.
    """

    padding = True

    def __init__(self, str_type=str, *, padding=None):
        self.str_type = str_type
        if padding is not None:
            self.padding = padding

    def __repr__(self):
        return (f"{self.__class__.__name__}({self.str_type.__name__}, "
                f"padding={self.padding})")

    def serialize(self, value, serializer):
        if not isinstance(value, str):
            raise SerializationError(f"invalid type: expected a string, got "
                                     f"{type(value).__name__}")
        try:
            data = value.encode('utf-8')
        except UnicodeEncodeError as exc:
            raise SerializationError(
                f"cannot encode {value!r} as utf-8: {exc}") from exc

        return serializer.serialize_str(codec.encode(data, self.padding))

    def deserialize(self, deserializer):
        text = deserializer.deserialize_str()
        try:
            data = codec.decode(text, self.padding)
        except ValueError as exc:
            raise DeserializationError(
                f"{text!r} is not valid base64: {exc}") from exc

        try:
            string = data.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise DeserializationError(
                f"decoded bytes are not valid utf-8: {exc}") from exc

        try:
            return self.str_type(string)
        except (TypeError, ValueError) as exc:
            raise DeserializationError(str(exc)) from exc
