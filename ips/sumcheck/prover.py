"""
Sum-check Prover: 라운드 다항식 생성기
========================================

다변수 다항식 g의 불리언 하이퍼큐브 합 H = Σ_{x∈{0,1}^n} g(x)를
Verifier에게 납득시키는 역할이다.

**라운드 구조** (n = 변수 개수):

  ┌─────────────────────────────────────────────────────┐
  │  시작: Prover → Verifier: H (claimed sum)           │
  ├─────────────────────────────────────────────────────┤
  │  Round i (0 ≤ i < n):                               │
  │    gᵢ(Xᵢ) = Σ_{b ∈ {0,1}^{n-i-1}}                   │
  │               g(r₀, ..., r_{i-1}, Xᵢ, b)             │
  │    Prover → Verifier: gᵢ                            │
  │    Verifier → Prover: rᵢ  (마지막 라운드 제외)      │
  └─────────────────────────────────────────────────────┘

**축약 엔진 (partial_sum / partial_eval)**:
  g의 각 항 c·∏ x_v^{e_v}에서 변수를 세 부류로 나눈다.
    - v < i : 이미 받은 챌린지 r_v를 대입 → 계수에 곱함
    - v = i : 기호로 남김 → 결과 항의 차수 e_i
    - v > i : 불리언 좌표 b_{v-i-1} ∈ {0,1} 대입 → 계수에 곱함
  같은 차수의 항은 계수를 합친다.

**비용**:
  라운드 i에서 2^(n-i-1)개의 불리언 할당을 모두 열거한다 (지수 시간).
  sum-check의 점근적 이점은 Verifier 쪽에 있으므로 허용된다.
  할당들은 서로 독립이므로 max_workers > 1이면 스레드 풀에서 병렬 평가한다.

사용 예시:
    >>> prover = Prover(g)
    >>> prover.run(claimed_sum, sum_tx, poly_tx, challenge_rx)
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from ips.hypercube import boolean_hypercube
from ips.sumcheck.channel import ChannelDisconnected
from ips.sumcheck.polynomial import UniPolynomial

logger = logging.getLogger(__name__)


class Prover:
    """sum-check Prover 상태 머신.

    속성:
        g: MultiPolynomial (읽기 전용)
        challenges: 지금까지 Verifier로부터 받은 챌린지 [r₀, r₁, ...]
        max_workers: partial_sum 병렬 평가에 사용할 스레드 수 (None/1이면 순차)
    """

    def __init__(self, g, max_workers=None):
        self.g = g
        self.challenges = []
        self.max_workers = max_workers

    def run(self, claimed_sum, sum_tx, poly_tx, challenge_rx):
        """Prover 쪽 프로토콜을 실행한다.

        Args:
            claimed_sum: 주장하는 합 H
            sum_tx: Sender: H를 한 번 보낸다
            poly_tx: Sender: 라운드마다 gᵢ를 보낸다
            challenge_rx: Receiver: 라운드마다 rᵢ를 받는다

        Returns:
            bool: 모든 라운드 다항식을 전달했으면 True,
                  상대가 먼저 연결을 끊어 중단되었으면 False
        """
        self.challenges = []
        n = self.g.num_vars
        try:
            sum_tx.send(claimed_sum)
            for i in range(n):
                logger.debug("prover: round %d", i)
                g_i = self.partial_sum(i)
                poly_tx.send(g_i)

                if i < n - 1:
                    self.challenges.append(challenge_rx.recv())
        except ChannelDisconnected:
            logger.debug(
                "prover: verifier disconnected after %d challenge(s)", len(self.challenges)
            )
            return False
        finally:
            sum_tx.close()
            poly_tx.close()
            challenge_rx.close()
        return True

    def partial_sum(self, i):
        """라운드 i의 다항식 gᵢ(Xᵢ)를 계산한다.

        변수 0..i-1은 받은 챌린지로 고정하고, 변수 i는 기호로 남기고,
        변수 i+1..n-1은 {0,1}^(n-i-1)의 모든 할당에 대해 합산한다.

        Args:
            i: 라운드 인덱스 (0 ≤ i < n, len(challenges) ≥ i)

        Returns:
            UniPolynomial: gᵢ
        """
        n_bits = self.g.num_vars - i - 1
        points = boolean_hypercube(n_bits, self.g.field)

        if self.max_workers and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                partials = list(executor.map(lambda point: self.partial_eval(i, point), points))
        else:
            partials = (self.partial_eval(i, point) for point in points)

        result = UniPolynomial.zero(self.g.field)
        for partial in partials:
            result = result + partial
        return result

    def partial_eval(self, i, point):
        """g의 변수 i만 남기고 나머지를 대입한 일변수 다항식을 구한다.

        Args:
            i: 기호로 남길 변수 인덱스
            point: 변수 i+1..n-1에 대입할 불리언 좌표 (길이 n-i-1)

        Returns:
            UniPolynomial: g(r₀, ..., r_{i-1}, Xᵢ, point)
        """
        field = self.g.field
        terms = []
        for coeff, term in self.g.terms:
            degree = 0
            value = coeff
            for var, power in term:
                if var == i:
                    degree = power
                elif var < i:
                    value = value * self.challenges[var] ** power
                else:
                    value = value * point[var - i - 1] ** power
            terms.append((degree, value))
        return UniPolynomial(terms, field)
