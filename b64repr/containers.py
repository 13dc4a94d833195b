# Licensed under the GPLv3 - see LICENSE
"""Containers of plain-data elements.

A container describes how a field value holds its elements: it can give a
numpy array of the elements held by a value, and, fallibly, create a new
value from such an array.  It also defines the value's native portable form,
used by formats for which no base64 encoding is done.

Any subclass of `ContainerBase` can be used by the adaptors in
`~b64repr.sequence`.
"""
import operator
from functools import reduce

import numpy as np

from .pod import check_any_bit_pattern


__all__ = ['ContainerBase', 'Bytes', 'Vector', 'Array', 'BoundedVector',
           'List', 'as_container']


class ContainerBase:
    """Base class for containers of plain-data elements.

    Subclasses should define ``from_elements`` and, if the value cannot be
    interpreted as an array with `numpy.asarray`, ``elements``.

    Parameters
    ----------
    dtype : `~numpy.dtype` or anything that can be interpreted as one
        Type of the elements.  Every bit pattern should represent a valid
        element (so, e.g., `bool` is not allowed).  Default: taken from the
        class attribute (unsigned bytes for the base class).
    """

    _dtype = np.dtype('u1')
    """Default element type: unsigned bytes."""

    def __init__(self, dtype=None):
        if dtype is None:
            dtype = self._dtype
        self.dtype = check_any_bit_pattern(dtype)

    def __repr__(self):
        return f"{self.__class__.__name__}(dtype={self.dtype.str!r})"

    def elements(self, value):
        """Array of the elements held by a value.

        Parameters
        ----------
        value : array-like or bytes-like
            If an array with a different dtype, it will be cast to the
            container's dtype, as long as this can be done safely.  Other
            array-likes are cast only within the same kind, and integers
            only if they fit.

        Returns
        -------
        elements : `~numpy.ndarray`
        """
        if isinstance(value, (bytes, bytearray, memoryview)):
            return np.frombuffer(value, dtype=self.dtype)

        if isinstance(value, np.ndarray):
            return value.astype(self.dtype, casting='safe', copy=False)

        if self.dtype.names is not None or self.dtype.kind in 'Mm':
            # Tuples or date strings only make sense given the dtype.
            return np.array(value, dtype=self.dtype)

        elements = np.asarray(value)
        if elements.size == 0:
            return elements.astype(self.dtype)

        # Python integers give int64 arrays, which should still be
        # accepted for narrower integer types if they fit.
        if elements.dtype.kind in 'iu' and self.dtype.kind in 'iu':
            info = np.iinfo(self.dtype)
            if (int(elements.min()) < info.min
                    or int(elements.max()) > info.max):
                raise ValueError(f"values outside the range of "
                                 f"{self.dtype.name}")

        return elements.astype(self.dtype, casting='same_kind')

    def from_elements(self, elements):
        """Create a value from an array of elements.

        The array is 1-dimensional when decoded from bytes, but may have
        more dimensions when created from a nested native form.  Should raise
        `ValueError` or `TypeError` if no valid value can be created.
        """
        raise NotImplementedError()

    @property
    def _native_dtype(self):
        # Numbers msgpack and the like can represent.
        kind = self.dtype.kind
        if kind == 'c':
            return np.dtype(f'{self.dtype.byteorder}f{self.dtype.itemsize//2}')
        if kind in 'Mm':
            return np.dtype(f'{self.dtype.byteorder}i8')
        return self.dtype

    def to_native(self, value):
        """Native portable form: (nested) lists of Python scalars.

        Complex numbers become pairs of floats, and datetimes and time
        deltas their integer representation.
        """
        elements = np.ascontiguousarray(self.elements(value))
        if self.dtype.kind == 'c':
            elements = elements.view((self._native_dtype, (2,)))
        elif self.dtype.kind in 'Mm':
            elements = elements.view(self._native_dtype)
        return elements.tolist()

    def from_native(self, native):
        """Create a value from its native portable form."""
        if self.dtype.names is not None:
            native = [tuple(item) for item in native]

        elements = np.array(native, dtype=self._native_dtype)
        if self.dtype.kind == 'c':
            if elements.ndim == 1 and elements.size == 0:
                elements = elements.reshape(0, 2)
            if elements.shape[-1:] != (2,):
                raise ValueError(f"expected pairs of real and imaginary "
                                 f"parts, got shape {elements.shape}")
            elements = np.ascontiguousarray(elements).view(self.dtype)[..., 0]
        elif self.dtype.kind in 'Mm':
            elements = elements.view(self.dtype)

        return self.from_elements(elements)


class Bytes(ContainerBase):
    """Container for `bytes` values.

    Any bytes-like value or iterable of integers is accepted on input.
    The native portable form is the `bytes` themselves.
    """

    def __init__(self):
        super().__init__()

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    @staticmethod
    def _as_bytes(value):
        # bytes(5) would give five zero bytes.
        if isinstance(value, (str, int, np.integer)):
            raise TypeError(f"invalid type: expected bytes, got "
                            f"{type(value).__name__}")
        return bytes(value)

    def elements(self, value):
        if not isinstance(value, (bytes, bytearray, memoryview, np.ndarray)):
            value = self._as_bytes(value)
        return super().elements(value)

    def from_elements(self, elements):
        return elements.tobytes()

    def to_native(self, value):
        return self.elements(value).tobytes()

    def from_native(self, native):
        return self._as_bytes(native)


class Vector(ContainerBase):
    """Container for 1-dimensional arrays of any length.

    Values are `~numpy.ndarray` (any array-like is accepted on input).
    """

    @staticmethod
    def _check_1d(elements):
        if elements.ndim != 1:
            raise ValueError(f"expected a 1-dimensional array, got one with "
                             f"shape {elements.shape}")
        return elements

    def elements(self, value):
        return self._check_1d(super().elements(value))

    def from_elements(self, elements):
        return self._check_1d(elements)


class Array(ContainerBase):
    """Container for arrays with a fixed shape.

    Parameters
    ----------
    dtype : `~numpy.dtype` or anything that can be interpreted as one
        Type of the elements.
    shape : int or tuple of int
        Shape of the array.
    """

    def __init__(self, dtype, shape):
        super().__init__(dtype)
        self.shape = ((operator.index(shape),) if np.ndim(shape) == 0
                      else tuple(operator.index(s) for s in shape))
        self.size = reduce(operator.mul, self.shape, 1)

    def __repr__(self):
        return (f"{self.__class__.__name__}(dtype={self.dtype.str!r}, "
                f"shape={self.shape})")

    def elements(self, value):
        elements = super().elements(value)
        if elements.shape != self.shape:
            raise ValueError(f"expected an array with shape {self.shape}, "
                             f"got one with shape {elements.shape}")
        return elements

    def from_elements(self, elements):
        if elements.ndim != 1 and elements.shape != self.shape:
            raise ValueError(f"expected an array with shape {self.shape}, "
                             f"got one with shape {elements.shape}")
        if elements.size != self.size:
            raise ValueError(f"expected an array of {self.size} elements, "
                             f"got {elements.size}")
        return elements.reshape(self.shape)


class BoundedVector(Vector):
    """Container for 1-dimensional arrays with a maximum length.

    Parameters
    ----------
    dtype : `~numpy.dtype` or anything that can be interpreted as one
        Type of the elements.
    capacity : int
        Maximum number of elements.
    """

    def __init__(self, dtype, capacity):
        super().__init__(dtype)
        self.capacity = operator.index(capacity)

    def __repr__(self):
        return (f"{self.__class__.__name__}(dtype={self.dtype.str!r}, "
                f"capacity={self.capacity})")

    def _check_length(self, n):
        if n > self.capacity:
            raise ValueError(f"{n} elements exceed the capacity of "
                             f"{self.capacity}")

    def elements(self, value):
        elements = super().elements(value)
        self._check_length(len(elements))
        return elements

    def from_elements(self, elements):
        self._check_length(elements.size)
        return super().from_elements(elements)


class List(ContainerBase):
    """Container for lists of Python numbers.

    Elements are converted to the given dtype on input, and back to
    Python scalars on output.
    """

    @staticmethod
    def _check_flat(elements):
        if elements.ndim != 1:
            raise ValueError(f"expected a flat sequence, got one with "
                             f"shape {elements.shape}")
        return elements

    def elements(self, value):
        return self._check_flat(super().elements(value))

    def from_elements(self, elements):
        return self._check_flat(elements).tolist()


def as_container(container):
    """Interpret the input as a container.

    Parameters
    ----------
    container : `ContainerBase`, dtype-like, or None
        A container is passed through; `None` gives `Bytes`, and anything
        else is taken to be the dtype of a `Vector`.
    """
    if container is None:
        return Bytes()
    if isinstance(container, ContainerBase):
        return container
    return Vector(container)
