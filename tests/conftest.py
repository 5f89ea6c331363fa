import sys
import os
import random
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ips.field import random_field_element
from ips.sumcheck.polynomial import MultiPolynomial


# ── 테스트 상수 ──
# g(x0, x1) = x0*x1 + x1,  Σ_{{0,1}^2} g = 0 + 1 + 0 + 2 = 3
SIMPLE_TERMS = [(1, [(0, 1), (1, 1)]), (1, [(1, 1)])]


def _random_multivariate_polynomial(rng, n_vars, n_terms):
    """각 변수가 1/3 확률로 등장하고 지수는 1..3인 랜덤 희소 다항식."""
    terms = []
    for _ in range(n_terms):
        term = [(v, rng.randint(1, 3)) for v in range(n_vars) if rng.random() < 0.33]
        terms.append((random_field_element(rng), term))
    return MultiPolynomial(n_vars, terms)


@pytest.fixture
def simple_poly():
    """g(x0, x1) = x0*x1 + x1."""
    return MultiPolynomial(2, SIMPLE_TERMS)


@pytest.fixture
def rng():
    """결정론적 난수 생성기 (seed=42)."""
    return random.Random(42)


@pytest.fixture
def random_polynomial():
    """random_polynomial(n_vars, n_terms, seed) → MultiPolynomial 팩토리."""
    def factory(n_vars=4, n_terms=10, seed=0):
        return _random_multivariate_polynomial(random.Random(seed), n_vars, n_terms)
    return factory
