"""
Freivalds 알고리즘: 행렬 곱의 확률적 검증
==========================================

C = A·B 인지 O(n³) 곱셈 없이 O(n²)에 확인한다.

  x = (1, r, r², ..., r^{n-1})   (r: 랜덤 필드 원소)
  A·(B·x) == C·x  ?

C ≠ A·B 이면 (C - A·B)·x 의 각 성분은 r에 대한 n-1차 이하 다항식이므로,
0이 아닌 행이 있을 때 검사를 통과할 확률은 ≤ (n-1) / |F| 이다.

행렬은 행(row) 리스트의 리스트로 표현한다.

사용 예시:
    >>> x = generate_fingerprint_vector(random_r(), n=3)
    >>> verify(x, A, B, matrix_multiply(A, B))   # True
"""

from ips.field import FR, random_field_element


def random_r(rng=None, field=FR):
    """Freivalds 검사용 랜덤 점 r을 샘플링한다."""
    return random_field_element(rng, field)


def generate_fingerprint_vector(r, n):
    """지문 벡터 [1, r, r², ..., r^{n-1}]을 만든다."""
    x = []
    power = type(r)(1)
    for _ in range(n):
        x.append(power)
        power = power * r
    return x


def matrix_vector_multiply(M, x):
    """행렬 M과 열벡터 x의 곱 M·x."""
    if any(len(row) != len(x) for row in M):
        raise ArithmeticError("행렬의 열 수와 벡터 길이가 다릅니다")
    result = []
    for row in M:
        acc = x[0] * 0 if x else FR(0)
        for m_ij, x_j in zip(row, x):
            acc = acc + m_ij * x_j
        result.append(acc)
    return result


def matrix_multiply(A, B):
    """행렬 곱 A·B (테스트와 데모용 O(n³) 구현)."""
    if any(len(row) != len(B) for row in A):
        raise ArithmeticError("A의 열 수와 B의 행 수가 다릅니다")
    cols = len(B[0]) if B else 0
    result = []
    for row in A:
        out = []
        for j in range(cols):
            acc = FR(0) if not row else row[0] * 0
            for k, a_ik in enumerate(row):
                acc = acc + a_ik * B[k][j]
            out.append(acc)
        result.append(out)
    return result


def verify(x, a, b, c):
    """A·(B·x) == C·x 인지 확인한다.

    Args:
        x: 지문 벡터 (generate_fingerprint_vector)
        a, b, c: n×n 행렬

    Returns:
        bool: 검사 통과 여부 (True면 높은 확률로 C = A·B)

    Raises:
        ArithmeticError: 행렬과 벡터의 차원이 맞지 않을 때
    """
    n = len(x)
    for name, M in (("A", a), ("B", b), ("C", c)):
        if len(M) != n:
            raise ArithmeticError(f"{name}의 행 수 {len(M)}가 벡터 길이 {n}과 다릅니다")

    y = matrix_vector_multiply(c, x)
    z = matrix_vector_multiply(a, matrix_vector_multiply(b, x))
    return z == y
