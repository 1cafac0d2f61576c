import numpy as np
import pytest

from proxlib.functions import IndBallL2, IndBox, IndNonnegative, IndPoint, \
    IndSimplex, IndZero, LeastSquares, Linear, NormL1, NormL2, SqrNormL2, Zero
from proxlib.tools.tests import checkFctDerivative, checkProxOptimality, \
    compare_vars

tol = 1e-10


def all_functions():
    return [
        (Zero(), (4, 3)),
        (Linear(np.random.randn(6)), (6,)),
        (NormL1(0.8), (10,)),
        (NormL1(np.linspace(0, 2, 7)), (7,)),
        (NormL2(1.3), (5, 2)),
        (SqrNormL2(0.6), (9,)),
        (LeastSquares(np.random.randn(8, 5), np.random.randn(8), lam=2.0), (5,)),
        (IndBox(-0.5, np.linspace(0, 1, 6)), (6,)),
        (IndNonnegative(), (3, 3)),
        (IndBallL2(0.9), (12,)),
        (IndPoint(np.arange(4.0)), (4,)),
        (IndZero(), (5,)),
        (IndSimplex(2.0), (15,)),
    ]


@pytest.mark.parametrize("gamma", [0.1, 1.0, 4.5])
def test_prox_agrees_with_naive(gamma):
    for f, shape in all_functions():
        x = 2*np.random.randn(*shape)
        y = np.empty_like(x)
        fy = f.prox_inplace(y, x, gamma)
        y_naive, fy_naive = f.prox_naive(x, gamma)
        compare_vars(y, y_naive)
        assert np.abs(fy - fy_naive) < 1e-8, type(f)
        assert np.abs(fy - f(y)) < 1e-8, type(f)


@pytest.mark.parametrize("gamma", [0.3, 2.0])
def test_prox_is_optimal(gamma):
    for f, shape in all_functions():
        checkProxOptimality(f, 2*np.random.randn(*shape), gamma=gamma)


def test_smooth_gradients():
    for f, shape in all_functions():
        if not f.is_smooth():
            continue
        x = np.random.randn(*shape)
        for h, err in checkFctDerivative(f, x, N=4):
            assert err <= 1e3*h**2, type(f)
        grad, fx = f.gradient(x)
        assert grad.shape == x.shape
        assert np.abs(fx - f(x)) < tol


def test_nonsmooth_subgradients():
    x = np.array([-2.0, 0.0, 3.0])
    grad, fx = NormL1(2.0).gradient(x)
    compare_vars(grad, np.array([-2.0, 0.0, 2.0]))
    assert fx == 10.0

    grad, fx = NormL2(2.0).gradient(np.array([3.0, 4.0]))
    compare_vars(grad, np.array([1.2, 1.6]))
    assert np.abs(fx - 10.0) < tol
    grad, fx = NormL2().gradient(np.zeros(3))
    compare_vars(grad, np.zeros(3))


def test_indicators_have_no_gradient():
    for f in [IndBox(0, 1), IndNonnegative(), IndBallL2(), IndZero(), IndSimplex()]:
        with pytest.raises(NotImplementedError):
            f.gradient(np.ones(3))


def test_soft_thresholding():
    f = NormL1(1.0)
    x = np.array([-3.0, -0.5, 0.0, 0.2, 1.5])
    y, fy = f.prox(x, 1.0)
    compare_vars(y, np.array([-2.0, 0.0, 0.0, 0.0, 0.5]))
    assert np.abs(fy - 2.5) < tol

    # elementwise step sizes
    y, fy = f.prox(x, np.array([1.0, 0.1, 1.0, 0.1, 2.0]))
    compare_vars(y, np.array([-2.0, -0.4, 0.0, 0.1, 0.0]))


def test_prox_in_place_on_input():
    for f in [NormL1(0.3), SqrNormL2(2.0), IndBox(-1, 1), IndBallL2()]:
        x = 3*np.random.randn(6)
        y_expected, fy_expected = f.prox(x, 0.7)
        fy = f.prox_inplace(x, x, 0.7)
        compare_vars(x, y_expected)
        assert np.abs(fy - fy_expected) < tol


def test_norm_l2_block_shrinkage():
    f = NormL2(1.0)
    x = np.array([3.0, 4.0])
    y, fy = f.prox(x, 2.0)
    compare_vars(y, np.array([1.8, 2.4]))
    assert np.abs(fy - 3.0) < tol
    y, fy = f.prox(x, 10.0)
    compare_vars(y, np.array([0.0, 0.0]))
    assert fy == 0
    with pytest.raises(NotImplementedError):
        f.prox(x, np.ones(2))


def test_sqr_norm_l2():
    f = SqrNormL2(3.0)
    x = np.random.randn(7)
    assert np.abs(f(x) - 1.5*np.sum(x**2)) < tol
    y, fy = f.prox(x, 0.5)
    compare_vars(y, x/2.5)
    assert f.is_strongly_convex()
    assert not SqrNormL2(0.0).is_strongly_convex()


def test_least_squares():
    A, b = np.random.randn(10, 4), np.random.randn(10)
    f = LeastSquares(A, b)
    assert f.is_strongly_convex()

    # prox with a huge step size approaches the least squares solution
    y, fy = f.prox(np.zeros(4), 1e8)
    compare_vars(y, np.linalg.lstsq(A, b, rcond=None)[0], rtol=1e-5, atol=1e-6)

    # the factorization is reused for the same step size
    f.prox(np.ones(4), 1e8)
    fact = f._fact
    f.prox(np.random.randn(4), 1e8)
    assert f._fact is fact
    f.prox(np.random.randn(4), 0.5)
    assert f._fact is not fact

    # fat matrices are not strongly convex
    assert not LeastSquares(np.random.randn(3, 5), np.ones(3)).is_strongly_convex()


def test_least_squares_dimension_errors():
    with pytest.raises(ValueError):
        LeastSquares(np.ones((3, 2)), np.ones(4))
    f = LeastSquares(np.ones((3, 2)), np.ones(3))
    with pytest.raises(ValueError):
        f(np.ones(5))


def test_indicator_values():
    assert IndBox(0, 1)(np.array([0.0, 0.5, 1.0])) == 0
    assert IndBox(0, 1)(np.array([0.0, 1.5])) == np.inf
    assert IndNonnegative()(np.array([1.0, 0.0])) == 0
    assert IndNonnegative()(np.array([1.0, -1e-3])) == np.inf
    assert IndBallL2(5.0)(np.array([3.0, 4.0])) == 0
    assert IndBallL2(5.0)(np.array([3.0, 4.1])) == np.inf
    assert IndZero()(np.zeros(3)) == 0
    assert IndZero()(np.array([0.0, 1.0])) == np.inf
    assert IndPoint([1.0, 2.0])(np.array([1.0, 2.0])) == 0
    assert IndSimplex()(np.array([0.25, 0.75])) == 0
    assert IndSimplex()(np.array([0.5, 0.75])) == np.inf
    assert IndSimplex()(np.array([1.5, -0.5])) == np.inf


def test_projections_are_feasible():
    for f in [IndBox(-1, 2), IndNonnegative(), IndBallL2(0.5), IndZero(),
              IndPoint(np.ones(20)), IndSimplex(3.0)]:
        x = 5*np.random.randn(20)
        y, fy = f.prox(x, 1.0)
        assert fy == 0
        assert f(y) == 0, type(f)
        # projections are idempotent
        compare_vars(f.prox(y, 0.1)[0], y)


def test_simplex_projection():
    f = IndSimplex(1.0)
    y, _ = f.prox(np.array([0.5, 0.5, 0.5]))
    compare_vars(y, np.array([1/3.0, 1/3.0, 1/3.0]))
    y, _ = f.prox(np.array([2.0, 0.0, -1.0]))
    compare_vars(y, np.array([1.0, 0.0, 0.0]))
    y, _ = f.prox(np.array([[0.4, 0.2], [0.2, 0.2]]))
    compare_vars(y, np.array([[0.4, 0.2], [0.2, 0.2]]))


def test_invalid_parameters():
    with pytest.raises(ValueError):
        NormL1(-1.0)
    with pytest.raises(ValueError):
        NormL2(np.ones(3))
    with pytest.raises(ValueError):
        SqrNormL2(np.array([1.0, -1.0]))
    with pytest.raises(ValueError):
        IndBox(1.0, 0.0)
    with pytest.raises(ValueError):
        IndBallL2(0.0)
    with pytest.raises(ValueError):
        IndSimplex(-1.0)


def test_integer_input():
    f = SqrNormL2()
    y, fy = f.prox(np.arange(4), 1.0)
    assert y.dtype == np.float64
    compare_vars(y, np.arange(4)/2.0)
    assert type(f(np.arange(4))) is np.float64


def test_predicates():
    assert NormL1().is_convex() and not NormL1().is_smooth()
    assert IndNonnegative().is_cone() and IndNonnegative().is_set()
    assert not IndBox(0, 1).is_cone()
    assert IndZero().is_cone() and IndZero().is_singleton()
    assert not IndPoint([1.0]).is_cone()
    assert Zero().is_affine() and Zero().is_smooth()
    assert Linear([1.0]).is_quadratic() and not Linear([1.0]).is_set()
    for f, shape in all_functions():
        assert f.is_prox_accurate()
        assert f.is_convex()


def test_metadata():
    f = NormL1(0.5)
    assert f.fun_name == "weighted L1 norm"
    assert f.fun_params == "λ = 0.5"
    assert "weighted L1 norm" in repr(f)
    assert IndZero().fun_params == "n/a"
    assert "lo = " in IndBox(0, 1).fun_params
