"""
Sum-check 데모: g(x₀, x₁) = x₀·x₁ + x₁
========================================

이 스크립트는 sum-check 프로토콜의 전체 흐름을 시연한다.

실행:
    python -m ips.sumcheck.example

흐름:
    1. 다항식 구성
    2. 불리언 하이퍼큐브 합 계산 (정직한 claimed sum)
    3. 라운드 다항식 미리보기
    4. 정직한 claimed sum으로 프로토콜 실행 → 수락
    5. 거짓 claimed sum으로 프로토콜 실행 → 거부
"""

import sys

from ips.field import FR
from ips.hypercube import boolean_hypercube, sum_over_boolean_hypercube
from ips.sumcheck.polynomial import MultiPolynomial
from ips.sumcheck.prover import Prover
from ips.sumcheck.verifier import Verifier, build_var_degree_table
from ips.sumcheck.protocol import run_protocol


def main():
    print("=" * 60)
    print("  Sum-check Interactive Proof Demo")
    print("  다항식: g(x0, x1) = x0*x1 + x1")
    print("=" * 60)

    # ── 1. 다항식 구성 ──
    print("\n[1] 다항식 구성...")
    g = MultiPolynomial(2, [(1, [(0, 1), (1, 1)]), (1, [(1, 1)])])
    print(f"    {g}")
    print(f"    변수별 차수 상한: {build_var_degree_table(g)}")

    # ── 2. 하이퍼큐브 합 ──
    print("\n[2] 불리언 하이퍼큐브 합 (전수 계산)...")
    for point in boolean_hypercube(g.num_vars):
        coords = tuple(int(x) for x in point)
        print(f"      g{coords} = {int(g.evaluate(point))}")
    honest_sum = sum_over_boolean_hypercube(g)
    print(f"    합 H = {int(honest_sum)}")

    # ── 3. 라운드 0 다항식 ──
    print("\n[3] 라운드 0 다항식 g0(X) = Σ_b g(X, b)...")
    g_0 = Prover(g).partial_sum(0)
    print(f"    g0 = {g_0}")
    print(f"    g0(0) + g0(1) = {int(g_0.evaluate(0) + g_0.evaluate(1))}")

    # ── 4. 정직한 실행 ──
    print("\n[4] 정직한 claimed sum으로 실행...")
    verifier = Verifier(g)
    result = run_protocol(g, honest_sum, verifier=verifier)
    print(f"    챌린지 수: {len(verifier.challenges)}")
    print(f"    검증 결과: {'수락 ✓' if result else '거부 ✗'}")

    # ── 5. 거짓 claimed sum ──
    print("\n[5] 거짓 claimed sum (H + 1)으로 실행...")
    verifier = Verifier(g)
    wrong_result = run_protocol(g, honest_sum + FR(1), verifier=verifier)
    reason = verifier.rejection.value if verifier.rejection else "-"
    print(f"    검증 결과: {'수락 ✓' if wrong_result else '거부 ✗ (예상대로 거부)'}")
    print(f"    거부 이유: {reason}")

    print("\n" + "=" * 60)
    if result and not wrong_result:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return bool(result and not wrong_result)


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
