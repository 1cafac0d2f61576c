
from proxlib import ProximableFunction, ArityError
from proxlib.tools import real_type, is_per_component

import logging

class SeparableSum(ProximableFunction):
    """ g(x1,...,xk) = f1(x1) + ... + fk(xk)

    The variable of g is a tuple (or list) of k arrays, the i-th array is
    passed to fi. Step sizes for the proximal operator are either a single
    value used for all components or a tuple/list of k values.

    Example:

        >>> g = SeparableSum(NormL1(), SqrNormL2())
        >>> x, y = np.random.randn(10), np.random.randn(20, 30)
        >>> g((x, y))
        >>> (u, v), guv = g.prox((x, y), 1.3)
    """
    fun_name = "separable sum"
    fun_dom = "n/a"
    fun_expr = "(x₁, …, xₖ) ↦ f₁(x₁) + … + fₖ(xₖ)"
    fun_params = "n/a"

    def __init__(self, *fs):
        ProximableFunction.__init__(self)
        if len(fs) == 1 and type(fs[0]) in [tuple, list]:
            fs = fs[0]
        if len(fs) == 0:
            raise ValueError("A separable sum needs at least one function")
        for f in fs:
            if not isinstance(f, ProximableFunction):
                raise TypeError("Not a proximable function: %r" % (f,))
        self.fs = tuple(fs)
        logging.debug("Separable sum of %d functions: %s" % (len(self.fs),
            ", ".join(type(f).__name__ for f in self.fs)))

    def __len__(self):
        return len(self.fs)

    def __getitem__(self, idx):
        return self.fs[idx]

    def __iter__(self):
        return iter(self.fs)

    def _check_arity(self, xs, what="x"):
        if len(xs) != len(self.fs):
            raise ArityError("Expected %d arrays in %s, got %d"
                             % (len(self.fs), what, len(xs)))

    def _gammas(self, gamma):
        if is_per_component(gamma):
            self._check_arity(gamma, what="gamma")
            return gamma
        return [gamma]*len(self.fs)

    def _check_blocks(self, xs, ys=None, gamma=None, what="y"):
        """ Check the number of blocks in xs, ys and gamma, also for components
            that are separable sums themselves

        Returns:
            The step size of each component.
        """
        self._check_arity(xs)
        if ys is not None:
            self._check_arity(ys, what=what)
        gammas = self._gammas(gamma)
        for i, f in enumerate(self.fs):
            if isinstance(f, SeparableSum):
                f._check_blocks(xs[i], None if ys is None else ys[i],
                                gammas[i], what=what)
        return gammas

    def _new_like(self, xs):
        self._check_arity(xs)
        return tuple(f._new_like(xi) for f, xi in zip(self.fs, xs))

    def is_prox_accurate(self):
        return all(f.is_prox_accurate() for f in self.fs)

    def is_convex(self):
        return all(f.is_convex() for f in self.fs)

    def is_set(self):
        return all(f.is_set() for f in self.fs)

    def is_singleton(self):
        return all(f.is_singleton() for f in self.fs)

    def is_cone(self):
        return all(f.is_cone() for f in self.fs)

    def is_affine(self):
        return all(f.is_affine() for f in self.fs)

    def is_smooth(self):
        return all(f.is_smooth() for f in self.fs)

    def is_quadratic(self):
        return all(f.is_quadratic() for f in self.fs)

    def is_generalized_quadratic(self):
        return all(f.is_generalized_quadratic() for f in self.fs)

    def is_strongly_convex(self):
        return all(f.is_strongly_convex() for f in self.fs)

    def __call__(self, xs):
        self._check_arity(xs)
        R = real_type(*xs)
        val = R(0)
        for f, xi in zip(self.fs, xs):
            val += R(f(xi))
        return val

    def prox_inplace(self, ys, xs, gamma=1.0):
        """ Write prox of fi with step size gamma (or gamma[i]) at xs[i] to ys[i]

        Returns:
            The sum of fi(ys[i]).
        """
        gammas = self._check_blocks(xs, ys, gamma)
        R = real_type(*xs)
        val = R(0)
        for f, yi, xi, gi in zip(self.fs, ys, xs, gammas):
            val += R(f.prox_inplace(yi, xi, gi))
        return val

    def gradient_inplace(self, grads, xs):
        """ Write gradient of fi at xs[i] to grads[i]

        Returns:
            The sum of fi(xs[i]).
        """
        self._check_blocks(xs, grads, what="grad")
        R = real_type(*xs)
        val = R(0)
        for f, gi, xi in zip(self.fs, grads, xs):
            val += R(f.gradient_inplace(gi, xi))
        return val

    def prox_naive(self, xs, gamma=1.0):
        gammas = self._check_blocks(xs, gamma=gamma)
        R = real_type(*xs)
        val = R(0)
        ys = []
        for f, xi, gi in zip(self.fs, xs, gammas):
            yi, fyi = f.prox_naive(xi, gi)
            ys.append(yi)
            val += R(fyi)
        return tuple(ys), val
