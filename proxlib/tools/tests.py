
from proxlib.tools import is_blocks

import logging

import numpy as np

def _blocks(x):
    return list(x) if is_blocks(x) else [x]

def _unblocks(x, blocks):
    return tuple(blocks) if is_blocks(x) else blocks[0]

def _inner(u, v):
    return sum(np.sum(ui*vi) for ui, vi in zip(_blocks(u), _blocks(v)))

def _random_direction(x, h):
    blocks = [np.random.randn(*np.shape(xi)) for xi in _blocks(x)]
    scale = h/np.sqrt(_inner(blocks, blocks))
    return _unblocks(x, [scale*vi for vi in blocks])

def _add(x, v):
    return _unblocks(x, [xi + vi for xi, vi in zip(_blocks(x), _blocks(v))])

def checkFctDerivative(fun, x, m0=1, N=8, ntrials=20):
    """
    Check gradient of `fun` at point `x` (array or tuple of arrays).

    Returns:
        list of (h, err) where err is the largest Taylor remainder
        |f(x + v) - f(x) - <grad f(x), v>| over random directions |v| = h.
        For smooth f, err/h**2 stays bounded.
    """
    gradfx, fx = fun.gradient(x)
    result = []
    for m in range(m0,m0+N):
        h = 10**(-m)
        err = 0
        for i in range(ntrials):
            v = _random_direction(x, h)
            taylor = fx + _inner(gradfx, v)
            err = max(err, np.abs(fun(_add(x, v)) - taylor))
        logging.info('%02d: % 7.2e % 7.2e % 7.2e' % (m, h, err, err/h**2))
        result.append((h, err))
    return result

def checkProxOptimality(fun, x, gamma=1.0, h=1e-3, ntrials=50, tol=1e-10):
    """
    Check that y = prox(x) is not beaten by random points near y in terms of

        f(z) + 1/(2*gamma)*|z - x|^2

    Only meaningful for convex `fun` and scalar `gamma`.
    """
    y, fy = fun.prox(x, gamma)
    diff = _add(y, _unblocks(x, [-xi for xi in _blocks(x)]))
    objy = fy + 0.5/gamma*_inner(diff, diff)
    for i in range(ntrials):
        z = _add(y, _random_direction(y, h))
        diff = _add(z, _unblocks(x, [-xi for xi in _blocks(x)]))
        objz = fun(z) + 0.5/gamma*_inner(diff, diff)
        if objz < objy - tol*max(1.0, abs(objy)):
            raise Exception("Prox not optimal: %e < %e" % (objz, objy))

def compare_vars(v1, v2, rtol=1e-7, atol=1e-9):
    """
    Compare two arrays or tuples of arrays blockwise.
    """
    b1, b2 = _blocks(v1), _blocks(v2)
    if len(b1) != len(b2):
        raise Exception("Mismatch: %d vs. %d blocks" % (len(b1), len(b2)))
    for i,(v1i,v2i) in enumerate(zip(b1, b2)):
        if not np.allclose(v1i, v2i, rtol=rtol, atol=atol):
            raise Exception("Mismatch in block %d: %e"
                            % (i, np.amax(np.abs(v1i-v2i))))
        logging.debug("Block i=%d ... successful!" % i)
