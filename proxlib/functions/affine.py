
from proxlib import ProximableFunction
from proxlib.tools import real_type, new_like

import numpy as np

class Zero(ProximableFunction):
    """ f(x) = 0 """
    fun_name = "zero function"
    fun_dom = "real or complex arrays"
    fun_expr = "x ↦ 0"

    def __call__(self, x):
        return real_type(x)(0)

    def prox_inplace(self, y, x, gamma=1.0):
        # independent of gamma
        y[...] = x
        return real_type(x)(0)

    def gradient_inplace(self, grad, x):
        grad[...] = 0
        return real_type(x)(0)

    def prox_naive(self, x, gamma=1.0):
        y = new_like(x)
        y[...] = x
        return y, real_type(x)(0)

    def is_convex(self):
        return True

    def is_set(self):
        return True

    def is_cone(self):
        return True

    def is_affine(self):
        return True

    def is_smooth(self):
        return True

    def is_quadratic(self):
        return True

    def is_generalized_quadratic(self):
        return True

class Linear(ProximableFunction):
    """ f(x) = <c, x> """
    fun_name = "linear function"
    fun_dom = "real arrays"
    fun_expr = "x ↦ <c, x>"
    fun_params = "c"

    def __init__(self, c):
        ProximableFunction.__init__(self)
        self.c = np.asarray(c)

    def __call__(self, x):
        return real_type(x)(np.sum(self.c*x))

    def prox_inplace(self, y, x, gamma=1.0):
        np.multiply(-gamma, self.c, out=y)
        y += x
        return self(y)

    def gradient_inplace(self, grad, x):
        grad[...] = self.c
        return self(x)

    def prox_naive(self, x, gamma=1.0):
        y = x - gamma*self.c
        return y, self(y)

    def is_convex(self):
        return True

    def is_smooth(self):
        return True

    def is_quadratic(self):
        return True

    def is_generalized_quadratic(self):
        return True
