
import numpy as np

from rotkit._typing import ARRAY_LIKE, FLOAT_ARRAY

from rotkit.rotations.exceptions import InvalidRotationError


def _check_array_and_shape(input: ARRAY_LIKE,
                           dtype: np.dtype | type = np.float64,
                           size: int | None = None,
                           shape: tuple[int, ...] | None = None) -> FLOAT_ARRAY:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    # always copy so the caller's data can never be changed through the result
    array = np.array(input, dtype=dtype)

    if shape is not None and array.shape != shape:
        if array.size == int(np.prod(shape)):
            array = array.reshape(shape)
        else:
            raise ValueError(f'The input must have shape {shape}, got {in_shape}')

    if size is not None and array.size != size:
        raise ValueError(f'The input must have {size} elements, got {array.size}')

    return array


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    return _check_array_and_shape(quaternion, dtype, shape=(4,))


def _check_vector_array_and_shape(vector: ARRAY_LIKE, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    return _check_array_and_shape(vector, dtype, shape=(3,))


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE, dtype: np.dtype | type = np.float64) -> FLOAT_ARRAY:
    return _check_array_and_shape(matrix, dtype, shape=(3, 3))


def _check_finite(array: FLOAT_ARRAY, name: str) -> FLOAT_ARRAY:
    if not np.isfinite(array).all():
        raise InvalidRotationError(f'The {name} must only contain finite values, got {array}')

    return array


def _gather_components(args: tuple, length: int, name: str) -> ARRAY_LIKE:
    """
    Interpret constructor arguments given either as `length` scalars or as a single array like of `length` elements.
    """

    if len(args) == 1:
        return args[0]

    if len(args) == length:
        return args

    raise TypeError(f'A {name} is built from {length} scalars or a single sequence of {length} elements, '
                    f'got {len(args)} arguments')


def _freeze(array: FLOAT_ARRAY) -> FLOAT_ARRAY:
    array.flags.writeable = False
    return array
