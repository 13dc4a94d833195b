# Licensed under the GPLv3 - see LICENSE
"""MessagePack format: binary, so base64 is only used where forced.

Records are written as arrays of their fields, in order of definition.
"""
from .base import MsgpackSerializer, MsgpackDeserializer, dumps, loads  # noqa

is_human_readable = False
