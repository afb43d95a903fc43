import numpy as np


_AXES = {
    'x': (1.0, 0.0, 0.0),
    'y': (0.0, 1.0, 0.0),
    'z': (0.0, 0.0, 1.0),
}


def _axis_vector(axis):
    if isinstance(axis, str):
        sign = 1.0
        if axis.startswith('-'):
            sign, axis = -1.0, axis[1:]
        if axis not in _AXES:
            raise ValueError('unknown axis {!r}'.format(axis))
        return sign * np.array(_AXES[axis])
    axis = np.array(axis, dtype=np.float64)
    if axis.shape != (3,):
        raise ValueError(
            'axis should be shape of (3,), get {}'.format(axis.shape))
    return axis


def _check_valid_rotation(rotation):
    rotation = np.asarray(rotation)
    if rotation.shape != (3, 3) \
       or not np.issubdtype(rotation.dtype, np.number):
        raise ValueError('rotation should be numeric 3x3 matrix')
    det = np.linalg.det(rotation)
    if abs(det - 1.0) > 1e-3:
        raise ValueError(
            'rotation should have determinant 1.0, get {}'.format(det))
    return rotation


def _check_valid_translation(translation):
    translation = np.asarray(translation)
    if not np.issubdtype(translation.dtype, np.number) \
       or translation.squeeze().shape != (3,):
        raise ValueError(
            'translation should be numeric 3 vector, get shape {}'.format(
                translation.shape))
    return translation


def rotation_matrix(theta, axis):
    """Return matrix rotating by theta [rad] around axis.

    Parameters
    ----------
    theta : float
    axis : str or list or numpy.ndarray
        'x', 'y', 'z' (optionally prefixed with '-') or a 3 vector.

    Examples
    --------
    >>> import numpy as np
    >>> from skcollision.coordinates.math import rotation_matrix
    >>> rotation_matrix(np.pi / 2.0, 'z').dot([1, 0, 0]).round(3)
    array([0., 1., 0.])
    """
    x, y, z = normalize_vector(_axis_vector(axis))
    k = np.array([[0.0, -z, y],
                  [z, 0.0, -x],
                  [-y, x, 0.0]])
    return np.eye(3) + np.sin(theta) * k \
        + (1.0 - np.cos(theta)) * k.dot(k)


def normalize_vector(v, ord=2):
    """Return v divided by its norm. A zero vector is returned as is."""
    v = np.array(v, dtype=np.float64)
    norm = np.linalg.norm(v, ord=ord)
    if norm == 0:
        return v
    return v / norm


def normalize_vectors(vs, eps=1e-12):
    """Row-wise :func:`normalize_vector`.

    Rows whose norm is below `eps` become zero vectors.
    """
    vs = np.array(vs, dtype=np.float64)
    norms = np.linalg.norm(vs, axis=1)
    valid = norms > eps
    out = np.zeros_like(vs)
    out[valid] = vs[valid] / norms[valid, None]
    return out


def quaternion_normalize(q):
    """Return unit quaternion [w, x, y, z]."""
    return normalize_vector(q)


def quaternion2matrix(q, normalize=False):
    """Return 3x3 rotation matrix of quaternion q.

    Parameters
    ----------
    q : list or numpy.ndarray
        quaternion in [w, x, y, z] order.
    normalize : bool
        normalize q instead of rejecting a non unit quaternion.

    Returns
    -------
    rot : numpy.ndarray
    """
    q = np.array(q, dtype=np.float64)
    if normalize:
        q = quaternion_normalize(q)
    elif not np.isclose(np.linalg.norm(q), 1.0):
        raise ValueError(
            'quaternion should be unit, get norm {}'.format(
                np.linalg.norm(q)))
    w, v = q[0], q[1:]
    return (w * w - v.dot(v)) * np.eye(3) + 2.0 * np.outer(v, v) \
        + 2.0 * w * np.array([[0.0, -v[2], v[1]],
                              [v[2], 0.0, -v[0]],
                              [-v[1], v[0], 0.0]])


def matrix2quaternion(m):
    """Return quaternion [w, x, y, z] of rotation matrix m.

    The sign is chosen so that w is not negative.
    """
    m = np.array(m, dtype=np.float64)
    # 4 candidates of 4|q_i|^2, the largest one is numerically safe
    diag = np.array([m[0, 0], m[1, 1], m[2, 2]])
    squares = 1.0 + np.array([diag.sum(),
                              diag[0] - diag[1] - diag[2],
                              diag[1] - diag[0] - diag[2],
                              diag[2] - diag[0] - diag[1]])
    i = int(np.argmax(squares))
    s = 2.0 * np.sqrt(squares[i])
    sums = (m[2, 1] - m[1, 2], m[0, 2] - m[2, 0], m[1, 0] - m[0, 1])
    pairs = (m[1, 0] + m[0, 1], m[0, 2] + m[2, 0], m[2, 1] + m[1, 2])
    if i == 0:
        q = [s / 4.0, sums[0] / s, sums[1] / s, sums[2] / s]
    elif i == 1:
        q = [sums[0] / s, s / 4.0, pairs[0] / s, pairs[1] / s]
    elif i == 2:
        q = [sums[1] / s, pairs[0] / s, s / 4.0, pairs[2] / s]
    else:
        q = [sums[2] / s, pairs[1] / s, pairs[2] / s, s / 4.0]
    q = np.array(q)
    if q[0] < 0:
        q = -q
    return q
