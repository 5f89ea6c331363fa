"""
다항식 평가 기반 파일 지문 (Fingerprinting)
============================================

파일 a = (a₀, a₁, ..., a_{m-1}) (각 aᵢ는 필드 원소)를 다항식

  p_a(X) = a₀ + a₁·X + ... + a_{m-1}·X^{m-1}

로 보고, 랜덤 점 r에서의 값 p_a(r)을 지문으로 사용한다.

두 파일이 다르면 p_a - p_b 는 0이 아닌 (m-1)차 이하 다항식이므로
지문이 충돌할 확률은 ≤ (m-1) / |F| 이다.

사용 예시:
    >>> r = random_r()
    >>> fingerprint(alice_file, r) == fingerprint(bob_file, r)
"""

from ips.field import FR, random_field_element


def random_r(rng=None, field=FR):
    """지문 평가 점 r을 샘플링한다."""
    return random_field_element(rng, field)


def fingerprint(file, r):
    """파일을 다항식으로 보고 r에서 평가한다 (Horner's method).

    Args:
        file: 필드 원소 리스트 (인덱스 = 차수)
        r: 평가 점

    Returns:
        필드 원소: p_file(r). 빈 파일은 0.
    """
    if not file:
        return type(r)(0)
    result = file[-1]
    for coeff in reversed(file[:-1]):
        result = result * r + coeff
    return result
