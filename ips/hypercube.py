"""
불리언 하이퍼큐브(Boolean Hypercube) 유틸리티
=============================================

{0,1}^n 위의 점을 정수 인덱스로 나열하는 공통 규칙을 한 곳에 모아 둔다.
Prover의 partial_sum, 참조용 전수 합계(sum_over_boolean_hypercube),
다중선형 확장(ips.mle)이 모두 이 규칙을 공유한다.

**인덱싱 규칙 (리틀엔디안)**:
  인덱스 w의 j번째 비트가 j번째 좌표가 된다.

    n = 3
    w = 0 → (0, 0, 0)
    w = 1 → (1, 0, 0)
    w = 2 → (0, 1, 0)
    w = 6 → (0, 1, 1)

사용 예시:
    >>> bit_decompose(6, 3)              # [FR(0), FR(1), FR(1)]
    >>> len(list(boolean_hypercube(4)))  # 16
"""

from ips.field import FR


def bit_decompose(index, n_bits, field=FR):
    """정수 인덱스를 n_bits개의 불리언 좌표(필드 원소)로 분해한다.

    Args:
        index: 0 ≤ index < 2^n_bits
        n_bits: 좌표 개수
        field: 좌표를 표현할 FQ 서브클래스

    Returns:
        list: [b₀, b₁, ..., b_{n_bits-1}] (bⱼ = index의 j번째 비트)
    """
    vals = []
    for _ in range(n_bits):
        vals.append(field(index & 1))
        index >>= 1
    return vals


def boolean_hypercube(n_bits, field=FR):
    """{0,1}^n_bits의 모든 점을 인덱스 순서대로 생성한다."""
    for index in range(1 << n_bits):
        yield bit_decompose(index, n_bits, field)


def sum_over_boolean_hypercube(g):
    """g를 {0,1}^n의 모든 점에서 평가하여 더한다 (전수 계산, O(2^n)).

    sum-check 프로토콜의 정직한 claimed sum을 구하는 참조 구현이다.
    Verifier의 신뢰 경로에는 포함되지 않는다.

    Args:
        g: num_vars, field, evaluate(point)를 제공하는 다변수 다항식

    Returns:
        필드 원소: Σ_{x ∈ {0,1}^n} g(x)

    예시 (g = x₀x₁ + x₁):
        >>> sum_over_boolean_hypercube(g)   # 0 + 1 + 0 + 2 = FR(3)
    """
    total = g.field(0)
    for point in boolean_hypercube(g.num_vars, g.field):
        total = total + g.evaluate(point)
    return total
