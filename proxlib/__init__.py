
from proxlib.tools import new_like

class ArityError(ValueError):
    """ Number of blocks in a tuple of arrays does not match the number
        of component functions
    """
    pass

class ProximableFunction(object):
    """ Representation of a proximable function f """
    fun_name = "n/a"
    fun_dom = "n/a"
    fun_expr = "n/a"
    fun_params = "n/a"

    def __call__(self, x):
        """ Evaluate f(x) """
        raise NotImplementedError("%s does not support being called"
                                  % type(self).__name__)

    def prox_inplace(self, y, x, gamma=1.0):
        """ Proximal operator of f

        y = argmin(z)[f(z) + 1/(2*gamma)*|z - x|^2]

        Args:
            y : numpy array of the same shape as x, the result is written here
            x : numpy array
            gamma : positive scalar or numpy array of the same shape as x
                (only supported by elementwise functions)

        Returns:
            The value f(y).
        """
        raise NotImplementedError("%s does not support taking prox"
                                  % type(self).__name__)

    def prox(self, x, gamma=1.0):
        """ Same as prox_inplace, but allocates the result

        Returns:
            (y, f(y))
        """
        y = self._new_like(x)
        fy = self.prox_inplace(y, x, gamma)
        return y, fy

    def gradient_inplace(self, grad, x):
        """ Gradient of f at x, written to grad

        Returns:
            The value f(x).
        """
        raise NotImplementedError("%s does not support gradients"
                                  % type(self).__name__)

    def gradient(self, x):
        """ Same as gradient_inplace, but allocates the result

        Returns:
            (grad, f(x))
        """
        grad = self._new_like(x)
        fx = self.gradient_inplace(grad, x)
        return grad, fx

    def _new_like(self, x):
        """ Uninitialized storage for a result at x """
        return new_like(x)

    def prox_naive(self, x, gamma=1.0):
        """ Slow and simple reference implementation of the proximal operator

        Returns:
            (y, f(y))
        """
        raise NotImplementedError("%s has no reference prox"
                                  % type(self).__name__)

    def is_prox_accurate(self):
        return True

    def is_convex(self):
        return False

    def is_set(self):
        return False

    def is_singleton(self):
        return False

    def is_cone(self):
        return False

    def is_affine(self):
        return False

    def is_smooth(self):
        return False

    def is_quadratic(self):
        return False

    def is_generalized_quadratic(self):
        return False

    def is_strongly_convex(self):
        return False

    def __or__(self, other):
        """ Separable sum (x1, x2) -> self(x1) + other(x2)

        Components of separable sums on either side are concatenated, so
        f | g | h has three components, however it is grouped. Use
        SeparableSum directly to nest sums.
        """
        from proxlib.calculus.separable_sum import SeparableSum
        if not isinstance(other, ProximableFunction):
            return NotImplemented
        fs = [f.fs if isinstance(f, SeparableSum) else (f,) for f in (self, other)]
        return SeparableSum(fs[0] + fs[1])

    def __repr__(self):
        return "description : %s\n" \
               "domain      : %s\n" \
               "expression  : %s\n" \
               "parameters  : %s" \
               % (self.fun_name, self.fun_dom, self.fun_expr, self.fun_params)
