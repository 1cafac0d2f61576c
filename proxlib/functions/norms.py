
from proxlib import ProximableFunction
from proxlib.tools import real_type

import numpy as np
from numpy.linalg import norm

def check_weight(lam):
    lam = np.asarray(lam)
    if np.any(lam < 0):
        raise ValueError("Weight must be nonnegative, got %s" % (lam,))
    return lam if lam.ndim > 0 else lam[()]

def check_scalar_step(f, gamma):
    if np.ndim(gamma) > 0:
        raise NotImplementedError("%s only supports scalar step sizes"
                                  % type(f).__name__)

class NormL1(ProximableFunction):
    """ f(x) = lam * sum_i |x_i|
        If lam is an array, the weights are applied elementwise.
    """
    fun_name = "weighted L1 norm"
    fun_dom = "real arrays"
    fun_expr = "x ↦ λ ∑ |xᵢ|"

    def __init__(self, lam=1.0):
        ProximableFunction.__init__(self)
        self.lam = check_weight(lam)

    @property
    def fun_params(self):
        return "λ = %s" % (self.lam,)

    def __call__(self, x):
        return real_type(x)(np.sum(self.lam*np.abs(x)))

    def prox_inplace(self, y, x, gamma=1.0):
        """ soft thresholding: y = sign(x)*max(0, |x| - gamma*lam) """
        sgn = np.sign(x)
        np.subtract(np.abs(x), gamma*self.lam, out=y)
        np.fmax(0, y, out=y)
        y *= sgn
        return self(y)

    def gradient_inplace(self, grad, x):
        """ subgradient, 0 where x == 0 """
        np.sign(x, out=grad)
        grad *= self.lam
        return self(x)

    def prox_naive(self, x, gamma=1.0):
        y = np.sign(x)*np.maximum(0, np.abs(x) - gamma*self.lam)
        return y, self(y)

    def is_convex(self):
        return True

class NormL2(ProximableFunction):
    """ f(x) = lam * |x|_2 """
    fun_name = "Euclidean norm"
    fun_dom = "real or complex arrays"
    fun_expr = "x ↦ λ‖x‖₂"

    def __init__(self, lam=1.0):
        ProximableFunction.__init__(self)
        if np.ndim(lam) > 0:
            raise ValueError("Weight of NormL2 must be a scalar")
        self.lam = check_weight(lam)

    @property
    def fun_params(self):
        return "λ = %s" % (self.lam,)

    def __call__(self, x):
        return real_type(x)(self.lam*norm(np.ravel(x)))

    def prox_inplace(self, y, x, gamma=1.0):
        check_scalar_step(self, gamma)
        xnorm = norm(np.ravel(x))
        scale = max(0, 1 - gamma*self.lam/xnorm) if xnorm > 0 else 0
        np.multiply(x, scale, out=y)
        return real_type(x)(self.lam*scale*xnorm)

    def gradient_inplace(self, grad, x):
        """ subgradient, 0 at x == 0 """
        xnorm = norm(np.ravel(x))
        if xnorm > 0:
            np.multiply(x, self.lam/xnorm, out=grad)
        else:
            grad[...] = 0
        return real_type(x)(self.lam*xnorm)

    def prox_naive(self, x, gamma=1.0):
        check_scalar_step(self, gamma)
        xnorm = norm(np.ravel(x))
        if xnorm == 0:
            y = np.zeros_like(x, dtype=np.result_type(x, real_type(x)))
        else:
            y = x*max(0, 1 - gamma*self.lam/xnorm)
        return y, self(y)

    def is_convex(self):
        return True

class SqrNormL2(ProximableFunction):
    """ f(x) = 0.5 * sum_i lam_i*|x_i|^2
        If lam is a scalar, this is 0.5*lam*|x|_2^2.
    """
    fun_name = "weighted squared Euclidean norm"
    fun_dom = "real or complex arrays"
    fun_expr = "x ↦ (λ/2)‖x‖²"

    def __init__(self, lam=1.0):
        ProximableFunction.__init__(self)
        self.lam = check_weight(lam)

    @property
    def fun_params(self):
        return "λ = %s" % (self.lam,)

    def __call__(self, x):
        return real_type(x)(0.5*np.sum(self.lam*np.abs(x)**2))

    def prox_inplace(self, y, x, gamma=1.0):
        np.divide(x, 1 + gamma*self.lam, out=y)
        return self(y)

    def gradient_inplace(self, grad, x):
        np.multiply(x, self.lam, out=grad)
        return self(x)

    def prox_naive(self, x, gamma=1.0):
        y = x/(1 + gamma*self.lam)
        return y, self(y)

    def is_convex(self):
        return True

    def is_smooth(self):
        return True

    def is_quadratic(self):
        return True

    def is_generalized_quadratic(self):
        return True

    def is_strongly_convex(self):
        return bool(np.all(self.lam > 0))
