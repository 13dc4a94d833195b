# Licensed under the GPLv3 - see LICENSE
"""JSON format: human readable, so base64 adaptors write text.

Records are written as JSON objects, with a member for each field.
"""
from .base import JSONSerializer, JSONDeserializer, dumps, loads  # noqa

is_human_readable = True
