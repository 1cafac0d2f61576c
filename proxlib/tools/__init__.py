
import numpy as np

def is_blocks(x):
    """ Tuples and lists are blocks of arrays (e.g. the variable of a
        separable sum), anything else is a single array or scalar
    """
    return type(x) in [tuple, list]

def real_type(*arrays):
    """ Real floating point type matching the precision of the given arrays

    Integer (and boolean) input is promoted to float64, complex input is
    mapped to the real type of the same precision. Tuples of arrays are
    searched recursively.

    Args:
        arrays : numpy arrays, scalars or tuples of those

    Returns:
        numpy scalar type, e.g. np.float32
    """
    dtype = np.result_type(*[real_type(*a) if is_blocks(a) else np.asarray(a).dtype
                             for a in arrays])
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.float64
    return np.finfo(dtype).dtype.type

def new_like(x):
    """ Uninitialized array with the shape of x and an inexact dtype """
    x = np.asarray(x)
    dtype = x.dtype if np.issubdtype(x.dtype, np.inexact) else np.float64
    return np.empty(x.shape, dtype=dtype)

def is_per_component(gamma):
    """ Step sizes given as a tuple or list are distributed over the
        components of a separable sum, anything else is applied uniformly
    """
    return is_blocks(gamma)
