
from proxlib import ProximableFunction
from proxlib.tools import real_type
from proxlib.functions.norms import check_weight, check_scalar_step

import logging

import numpy as np
import scipy.linalg

class LeastSquares(ProximableFunction):
    """ f(x) = 0.5*lam*|A x - b|_2^2

    The prox requires solving (I + gamma*lam*A^T A) y = x + gamma*lam*A^T b.
    The Cholesky factor of the system matrix is cached and only recomputed
    when the step size changes.
    """
    fun_name = "least squares penalty"
    fun_dom = "real vectors"
    fun_expr = "x ↦ (λ/2)‖Ax - b‖²"

    def __init__(self, A, b, lam=1.0):
        ProximableFunction.__init__(self)
        self.A = np.atleast_2d(np.asarray(A, dtype=np.float64))
        self.b = np.asarray(b, dtype=np.float64)
        if self.b.shape != (self.A.shape[0],):
            raise ValueError("Dimension error: A is {}, b is {}".format(
                self.A.shape, self.b.shape))
        if np.ndim(lam) > 0:
            raise ValueError("Weight of LeastSquares must be a scalar")
        self.lam = check_weight(lam)
        self.AtA = self.A.T.dot(self.A)
        self.Atb = self.A.T.dot(self.b)
        self._full_column_rank = \
            np.linalg.matrix_rank(self.A) == self.A.shape[1]
        self._gamma = None
        self._fact = None

    @property
    def fun_params(self):
        return "A = %d×%d array, b = vector, λ = %s" \
               % (self.A.shape[0], self.A.shape[1], self.lam)

    def __call__(self, x):
        res = self.A.dot(x) - self.b
        return real_type(x)(0.5*self.lam*np.einsum('i,i->', res, res))

    def _factor(self, gamma):
        if self._fact is None or self._gamma != gamma:
            logging.debug("Factorizing I + gamma*lam*A^T A (gamma=%g)" % gamma)
            M = np.eye(self.A.shape[1]) + gamma*self.lam*self.AtA
            self._fact = scipy.linalg.cho_factor(M)
            self._gamma = gamma
        return self._fact

    def prox_inplace(self, y, x, gamma=1.0):
        check_scalar_step(self, gamma)
        rhs = x + gamma*self.lam*self.Atb
        y[:] = scipy.linalg.cho_solve(self._factor(gamma), rhs)
        return self(y)

    def gradient_inplace(self, grad, x):
        res = self.A.dot(x) - self.b
        grad[:] = self.lam*self.A.T.dot(res)
        return real_type(x)(0.5*self.lam*np.einsum('i,i->', res, res))

    def prox_naive(self, x, gamma=1.0):
        check_scalar_step(self, gamma)
        M = np.eye(self.A.shape[1]) + gamma*self.lam*self.AtA
        y = np.linalg.solve(M, x + gamma*self.lam*self.Atb)
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
        return bool(self.lam > 0 and self._full_column_rank)

