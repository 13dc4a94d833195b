# Licensed under the GPLv3 - see LICENSE
"""Base64 representations of record fields.

Field adaptors that write binary data, arrays of plain numbers, and
strings as URL-safe base64 text, for use in records (dataclasses)
converted to formats such as JSON and MessagePack.
"""
from .base import field, SerializationError, DeserializationError  # noqa
from .containers import (  # noqa
    Bytes, Vector, Array, BoundedVector, List)
from .sequence import Base64, Base64IfReadable  # noqa
from .text import Base64String  # noqa
from .io import dumps, loads  # noqa

try:
    from .version import version as __version__
except ImportError:
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
__minimum_msgpack_version__ = '1.0'
