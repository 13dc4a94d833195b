# Licensed under the GPLv3 - see LICENSE
"""Declaration of record fields with conversion adaptors.

Records are dataclasses.  A field can be given an adaptor, which then takes
over how that field is converted to and from its portable form::

    @dataclasses.dataclass
    class Samples:
        name: str
        data: np.ndarray = field(adaptor=Base64(Vector('<i2')))

An adaptor is any object with methods ``serialize(value, serializer)`` and
``deserialize(deserializer)``.
"""
import dataclasses


__all__ = ['field', 'get_adaptor', 'ADAPTOR_KEY']


ADAPTOR_KEY = 'b64repr.adaptor'
"""Key under which the adaptor is stored in the field metadata."""


def field(*, adaptor=None, metadata=None, **kwargs):
    """Define a dataclass field, possibly with a conversion adaptor.

    Parameters
    ----------
    adaptor : object, optional
        Used to convert the field's value.  By default, the format's own
        conversion is used.
    metadata : mapping, optional
        Any further field metadata.
    **kwargs
        Passed on to `dataclasses.field`.
    """
    metadata = dict(metadata or {})
    if adaptor is not None:
        if not (hasattr(adaptor, 'serialize')
                and hasattr(adaptor, 'deserialize')):
            raise TypeError(f"{adaptor!r} does not have serialize and "
                            "deserialize methods.")
        metadata[ADAPTOR_KEY] = adaptor
    return dataclasses.field(metadata=metadata, **kwargs)


def get_adaptor(fld):
    """Get the adaptor for a dataclass field, or `None` if it has none."""
    return fld.metadata.get(ADAPTOR_KEY, None)
