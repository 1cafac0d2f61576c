
from proxlib import ProximableFunction
from proxlib.tools import real_type

import numpy as np
from numpy.linalg import norm
import numba

# relative tolerance when checking membership of a point
TOL = 1e-10

def indicator(x, infeas, scale=1.0):
    """ 0 if the infeasibility measure is (numerically) zero, else infty """
    R = real_type(x)
    return R(0) if infeas <= TOL*max(1.0, scale) else R(np.inf)

class IndicatorFunction(ProximableFunction):
    """ Indicator of a closed set: f(x) = 0 if x in S else infty

    The prox of an indicator is the projection onto S and does not depend
    on the step size.
    """
    def project(self, y, x):
        raise NotImplementedError("%s does not support projections"
                                  % type(self).__name__)

    def prox_inplace(self, y, x, gamma=1.0):
        # independent of gamma
        self.project(y, x)
        return real_type(x)(0)

    def is_set(self):
        return True

    def is_convex(self):
        return True

class IndBox(IndicatorFunction):
    """ f(x) = 0 if lo <= x <= hi else infty (elementwise, with broadcasting) """
    fun_name = "indicator of a box"
    fun_dom = "real arrays"
    fun_expr = "x ↦ 0 if all(lo ⩽ x ⩽ hi) else +∞"

    def __init__(self, lo=-np.inf, hi=np.inf):
        IndicatorFunction.__init__(self)
        self.lo, self.hi = np.asarray(lo), np.asarray(hi)
        if np.any(self.lo > self.hi):
            raise ValueError("Lower bound of box exceeds upper bound")

    @property
    def fun_params(self):
        return "lo = %s, hi = %s" % (self.lo, self.hi)

    def __call__(self, x):
        infeas = max(np.amax(np.fmax(0, self.lo - x), initial=0),
                     np.amax(np.fmax(0, x - self.hi), initial=0))
        return indicator(x, infeas)

    def project(self, y, x):
        np.clip(x, self.lo, self.hi, out=y)

    def prox_naive(self, x, gamma=1.0):
        y = np.minimum(self.hi, np.maximum(self.lo, x))
        return y, real_type(x)(0)

class IndNonnegative(IndicatorFunction):
    """ f(x) = 0 if x >= 0 else infty """
    fun_name = "indicator of the nonnegative orthant"
    fun_dom = "real arrays"
    fun_expr = "x ↦ 0 if all(0 ⩽ x) else +∞"

    def __call__(self, x):
        infeas = norm(np.ravel(np.fmin(0, x)), ord=np.inf) if np.size(x) else 0
        return indicator(x, infeas)

    def project(self, y, x):
        np.fmax(0, x, out=y)

    def prox_naive(self, x, gamma=1.0):
        y = np.maximum(0, x)
        return y, real_type(x)(0)

    def is_cone(self):
        return True

class IndBallL2(IndicatorFunction):
    """ f(x) = 0 if |x|_2 <= r else infty """
    fun_name = "indicator of an L2 norm ball"
    fun_dom = "real or complex arrays"
    fun_expr = "x ↦ 0 if ‖x‖ ⩽ r else +∞"

    def __init__(self, r=1.0):
        IndicatorFunction.__init__(self)
        if r <= 0:
            raise ValueError("Radius of the ball must be positive")
        self.r = r

    @property
    def fun_params(self):
        return "r = %s" % (self.r,)

    def __call__(self, x):
        return indicator(x, max(0, norm(np.ravel(x)) - self.r), self.r)

    def project(self, y, x):
        xnorm = norm(np.ravel(x))
        if xnorm > self.r:
            np.multiply(x, self.r/xnorm, out=y)
        else:
            y[...] = x

    def prox_naive(self, x, gamma=1.0):
        xnorm = norm(np.ravel(x))
        y = self.r*x/xnorm if xnorm > self.r else x.copy()
        return y, real_type(x)(0)

class IndPoint(IndicatorFunction):
    """ f(x) = 0 if x == p else infty (use broadcasting in p if necessary) """
    fun_name = "indicator of a point"
    fun_dom = "real or complex arrays"
    fun_expr = "x ↦ 0 if x = p else +∞"

    def __init__(self, p=0):
        IndicatorFunction.__init__(self)
        self.p = np.asarray(p)

    @property
    def fun_params(self):
        return "p = %s" % (self.p,)

    def __call__(self, x):
        infeas = np.amax(np.abs(x - self.p), initial=0)
        return indicator(x, infeas, np.amax(np.abs(self.p), initial=0))

    def project(self, y, x):
        y[...] = self.p

    def prox_naive(self, x, gamma=1.0):
        y = np.broadcast_to(self.p, np.shape(x)).astype(np.result_type(x, self.p, 1.0))
        return y, real_type(x)(0)

    def is_singleton(self):
        return True

    def is_cone(self):
        return not np.any(self.p)

    def is_affine(self):
        return True

    def is_generalized_quadratic(self):
        return True

class IndZero(IndPoint):
    """ f(x) = 0 if x == 0 else infty """
    fun_name = "indicator of the zero point"
    fun_expr = "x ↦ 0 if all(x = 0) else +∞"
    fun_params = "n/a"

    def __init__(self):
        IndPoint.__init__(self, p=0)

@numba.jit
def simplex_projection(x, a, y):
    """ Project the vector x onto {y : y >= 0, sum(y) == a}

    Args:
        x : numpy array of shape (N,)
        a : positive float
        y : numpy array of shape (N,)
    Returns:
        nothing, the result is written to y
    """
    N = x.size
    u = np.sort(x)[::-1]
    csum = 0.0
    theta = 0.0
    for i in range(N):
        csum += u[i]
        t = (csum - a)/(i + 1)
        if u[i] > t:
            theta = t
    for i in range(N):
        y[i] = max(x[i] - theta, 0.0)

class IndSimplex(IndicatorFunction):
    """ f(x) = 0 if x >= 0 and sum(x) == a else infty """
    fun_name = "indicator of the probability simplex"
    fun_dom = "real arrays"
    fun_expr = "x ↦ 0 if all(0 ⩽ x) and sum(x) = a else +∞"

    def __init__(self, a=1.0):
        IndicatorFunction.__init__(self)
        if a <= 0:
            raise ValueError("Sum of the simplex must be positive")
        self.a = a

    @property
    def fun_params(self):
        return "a = %s" % (self.a,)

    def __call__(self, x):
        infeas = max(np.amax(np.fmax(0, -x), initial=0), abs(np.sum(x) - self.a))
        return indicator(x, infeas, self.a)

    def project(self, y, x):
        x = np.ascontiguousarray(x, dtype=y.dtype).ravel()
        out = np.empty_like(x)
        simplex_projection(x, float(self.a), out)
        y[...] = out.reshape(y.shape)

    def prox_naive(self, x, gamma=1.0):
        # bisection on the threshold theta in sum(max(x - theta, 0)) == a
        x = np.asarray(x, dtype=np.result_type(x, 1.0))
        lo, hi = np.amin(x) - self.a, np.amax(x)
        for _ in range(200):
            theta = 0.5*(lo + hi)
            if np.sum(np.maximum(x - theta, 0)) > self.a:
                lo = theta
            else:
                hi = theta
        y = np.maximum(x - 0.5*(lo + hi), 0)
        return y, real_type(x)(0)
