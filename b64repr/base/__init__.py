# Licensed under the GPLv3 - see LICENSE
"""Base implementations shared between all formats.

Records are dataclasses whose fields are converted one by one to a
portable form that a format can write.  How a given field is converted
can be taken over by an adaptor, declared with
`~b64repr.base.record.field`.  The `~b64repr.base.format` module defines
the serializer and deserializer base classes that formats build on, and
through which adaptors learn whether a format is human readable.  Errors
are defined in `~b64repr.base.errors`.
"""
from .errors import *  # noqa
from .record import field  # noqa
