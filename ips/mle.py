"""
다중선형 확장 (Multilinear Extension, MLE)
===========================================

함수 f: {0,1}^n → F 의 다중선형 확장 f̃ 는 모든 불리언 점에서 f와 값이
같은 유일한 다중선형 다항식이다.

  f̃(x) = Σ_{w ∈ {0,1}^n} f(w) · χ_w(x)
  χ_w(x) = ∏_j ( w_j·x_j + (1 - w_j)·(1 - x_j) )

**두 가지 평가 방법**:
  - eval_mle_naive: 매 w마다 χ_w(x)를 새로 계산 → O(n · 2^n)
  - eval_mle_memo : χ 표를 한 번에 만들어 재사용 → O(2^n)
    표는 변수를 하나씩 추가하며 크기를 두 배로 늘려 만든다.

인덱싱은 ips.hypercube와 같은 리틀엔디안 규칙을 따른다
(w의 j번째 비트 ↔ 좌표 x_j).

사용 예시:
    >>> f_ws = precompute_f_ws(lambda w: FR(w * w), 3)
    >>> x = [FR(5), FR(7), FR(11)]
    >>> eval_mle_naive(f_ws, x) == eval_mle_memo(f_ws, build_chi_table(x))  # True
"""

from ips.field import FR
from ips.hypercube import bit_decompose


def precompute_f_ws(f, n_bits):
    """f를 불리언 하이퍼큐브 전체에서 평가한 표를 만든다.

    Args:
        f: 인덱스 w(정수)를 받아 필드 원소를 반환하는 함수
        n_bits: 변수 개수 (≤ 64)

    Returns:
        list: [f(0), f(1), ..., f(2^n_bits - 1)]

    Raises:
        ValueError: n_bits > 64
    """
    if n_bits > 64:
        raise ValueError(f"n_bits는 64 이하여야 합니다: {n_bits}")
    return [f(w) for w in range(1 << n_bits)]


def chi_term(w_bit, x):
    """한 좌표의 Lagrange 인자: w·x + (1 - w)·(1 - x)."""
    one = type(x)(1)
    return w_bit * x + (one - x) * (one - w_bit)


def chi_w(w, x):
    """χ_w(x) = ∏_j chi_term(w_j, x_j)."""
    field = type(x[0]) if x else FR
    prod = field(1)
    for w_bit, x_j in zip(bit_decompose(w, len(x), field), x):
        prod = prod * chi_term(w_bit, x_j)
    return prod


def _check_table_size(f_ws, x):
    if len(f_ws) != 1 << len(x):
        raise ValueError(
            f"표 크기 {len(f_ws)}가 2^{len(x)}와 다릅니다 (평가 점 차원 {len(x)})"
        )


def eval_mle_naive(f_ws, x):
    """f̃(x)를 정의대로 계산한다: Σ f(w)·χ_w(x).

    Args:
        f_ws: precompute_f_ws의 결과 (길이 2^n)
        x: 길이 n의 평가 점

    Returns:
        필드 원소: f̃(x)
    """
    _check_table_size(f_ws, x)
    field = type(x[0]) if x else FR
    result = field(0)
    for w, f_w in enumerate(f_ws):
        result = result + f_w * chi_w(w, x)
    return result


def build_chi_table(x):
    """모든 w에 대한 χ_w(x) 표를 만든다 (메모이제이션).

    변수 x_j를 추가할 때마다 기존 표의 각 원소 c에 대해
    c·(1 - x_j) (w_j = 0) 와 c·x_j (w_j = 1) 두 값을 만든다.

    Args:
        x: 길이 n의 평가 점

    Returns:
        list: table[w] = χ_w(x), 길이 2^n
    """
    field = type(x[0]) if x else FR
    table = [field(1)]
    for j, x_j in enumerate(x):
        chi_0 = chi_term(field(0), x_j)
        chi_1 = chi_term(field(1), x_j)
        # 새 인덱스 w = old + w_j·2^j → 하위 절반은 w_j = 0, 상위 절반은 w_j = 1
        table = [c * chi_0 for c in table] + [c * chi_1 for c in table]
    return table


def eval_mle_memo(f_ws, chi_table):
    """미리 만든 χ 표로 f̃(x)를 계산한다: Σ f(w)·table[w].

    Args:
        f_ws: precompute_f_ws의 결과
        chi_table: build_chi_table(x)의 결과

    Returns:
        필드 원소: f̃(x)
    """
    if len(f_ws) != len(chi_table):
        raise ValueError(f"표 크기가 다릅니다: {len(f_ws)} != {len(chi_table)}")
    result = chi_table[0] * 0
    for f_w, chi in zip(f_ws, chi_table):
        result = result + f_w * chi
    return result
