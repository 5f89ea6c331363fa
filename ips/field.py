"""
공유 모듈: 유한체(Finite Field)와 랜덤 원소 샘플링
==================================================

이 모듈은 sum-check 프로토콜과 주변 확률적 증명 도구(Freivalds, 지문, MLE)
전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). 모든 다항식의 계수,
  Verifier의 챌린지, 합(claimed sum)은 이 필드의 원소이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 산술 자체는 py_ecc의 FQ 클래스가 제공한다

**랜덤 원소 샘플링 (rejection sampling)**:
  고정 길이(FIELD_BYTES) 랜덤 바이트열을 뽑아 정규 범위 [0, p)의 정수로
  해석한다. 범위를 벗어나면 버리고 다시 뽑는다.
  - 바이트열을 리틀엔디안 정수로 읽고 p의 비트 길이로 마스킹
  - 마스킹된 값이 p 이상이면 "유효하지 않음" → 재시도
  - 성공 확률 = p / 2^bits ≥ 1/2 → 평균 2회 이내에 종료

사용 예시:
    >>> from ips.field import FR, random_field_element
    >>> a = FR(3)
    >>> r = random_field_element()   # FR 위의 균등 랜덤 원소
    >>> a * r + FR(1)
"""

import random

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    bn128.curve_order (≈ 2^254) 위의 모듈러 산술을 지원한다.
    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    속성:
        field_modulus: bn128 곡선 위수 (소수 p)

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> x ** 2          # FR(9)
        >>> FR.zero() + FR.one()   # FR(1)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# FR 샘플링에 사용하는 랜덤 바이트열 길이 (32바이트)
FIELD_BYTES = (CURVE_ORDER.bit_length() + 7) // 8


# ─────────────────────────────────────────────────────────────────────
# 바이트열 → 필드 원소 변환
# ─────────────────────────────────────────────────────────────────────

def field_byte_length(field=FR):
    """field 원소 하나를 표현하는 데 필요한 바이트 수.

    모듈러스 비트 길이를 바이트 단위로 올림한 값이다.
    FR의 경우 FIELD_BYTES(32)와 같다.
    """
    return (field.field_modulus.bit_length() + 7) // 8


def from_random_bytes(field, data):
    """랜덤 바이트열을 field 원소로 변환한다 (실패 가능).

    바이트열을 리틀엔디안 정수로 해석한 뒤 모듈러스의 비트 길이로
    마스킹한다. 결과가 모듈러스 이상이면 정규 표현이 아니므로 None을
    반환한다 (호출자가 재시도해야 함).

    Args:
        field: FQ 서브클래스 (예: FR)
        data: 바이트열

    Returns:
        field 원소, 또는 정규 범위를 벗어나면 None

    예시:
        >>> from_random_bytes(FR, b"\\x05" + b"\\x00" * 31)   # FR(5)
        >>> from_random_bytes(FR, b"\\xff" * 32)               # None
    """
    modulus = field.field_modulus
    value = int.from_bytes(bytes(data), "little")
    value &= (1 << modulus.bit_length()) - 1
    if value >= modulus:
        return None
    return field(value)


# ─────────────────────────────────────────────────────────────────────
# 랜덤 필드 원소 샘플링
# ─────────────────────────────────────────────────────────────────────

_system_random = random.SystemRandom()


def random_field_element(rng=None, field=FR):
    """field 위의 균등 랜덤 원소를 rejection sampling으로 생성한다.

    Args:
        rng: randbytes(n)을 제공하는 난수 생성기.
             None이면 운영체제 엔트로피(random.SystemRandom)를 사용한다.
             테스트에서는 random.Random(seed)로 결정론적 실행이 가능하다.
        field: FQ 서브클래스 (기본값: FR)

    Returns:
        field 원소

    예시:
        >>> r = random_field_element(random.Random(42))
        >>> isinstance(r, FR)   # True
    """
    if rng is None:
        rng = _system_random
    n_bytes = field_byte_length(field)
    r = None
    while r is None:
        r = from_random_bytes(field, rng.randbytes(n_bytes))
    return r
