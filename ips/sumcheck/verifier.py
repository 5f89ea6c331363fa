"""
Sum-check Verifier
===================

Prover가 주장한 합 H = Σ_{x∈{0,1}^n} g(x)를 하이퍼큐브 전체를 계산하지 않고
라운드당 상수 번의 일변수 평가로 검증한다.

**검증 과정**:
  0. 차수 표(degree table) 계산: deg_v = g에서 x_v의 최대 지수
  1. H 수신, target ← H
  2. Round i마다:
     a. gᵢ 수신
     b. deg(gᵢ) > deg_i        → 거부 (Rejection.DEGREE)
     c. gᵢ(0) + gᵢ(1) ≠ target → 거부 (Rejection.CONSISTENCY)
     d. 랜덤 챌린지 rᵢ 샘플링, target ← gᵢ(rᵢ)
     e. 마지막 라운드: target ≠ g(r₀, ..., r_{n-1}) → 거부 (Rejection.FINAL_EVALUATION)
        그 외: rᵢ를 Prover에게 전송

**건전성(soundness)**:
  거짓 H가 수락될 확률 ≤ d·n / |F|   (Schwartz–Zippel 보조정리)
    d: 라운드 다항식 차수 상한의 최댓값
    n: 변수 개수
  FR(|F| ≈ 2^254)에서는 사실상 0이다.

거부는 즉시 False를 반환한다 (재시도 없음). 채널이 끊기면 판정 없이
None을 반환한다.

사용 예시:
    >>> verifier = Verifier(g)
    >>> verifier.run(sum_rx, challenge_tx, poly_rx)   # True / False / None
"""

import enum
import logging

from ips.field import random_field_element
from ips.sumcheck.channel import ChannelDisconnected

logger = logging.getLogger(__name__)


class Rejection(enum.Enum):
    """Verifier가 증명을 거부한 이유."""
    DEGREE = "round polynomial exceeds the degree bound"
    CONSISTENCY = "g_i(0) + g_i(1) does not match the running target"
    FINAL_EVALUATION = "final target does not match g at the challenge point"


def build_var_degree_table(g):
    """변수별 최대 지수 표를 만든다.

    Args:
        g: MultiPolynomial

    Returns:
        list[int]: table[v] = g의 모든 항에서 x_v의 최대 지수 (없으면 0)

    예시 (g = x₀x₁² + x₁):
        >>> build_var_degree_table(g)   # [1, 2]
    """
    table = [0] * g.num_vars
    for _, term in g.terms:
        for var, power in term:
            if power > table[var]:
                table[var] = power
    return table


class Verifier:
    """sum-check Verifier 상태 머신.

    속성:
        g: MultiPolynomial (읽기 전용, 마지막 라운드의 오라클 검사에 사용)
        rng: 챌린지 샘플링용 난수 생성기 (None이면 운영체제 엔트로피)
        challenges: 지금까지 샘플링한 챌린지 [r₀, r₁, ...]
        target: 현재 라운드에서 gᵢ(0) + gᵢ(1)이 맞춰야 할 값
        rejection: 마지막 실행의 거부 이유 (수락/중단 시 None)
    """

    def __init__(self, g, rng=None):
        self.g = g
        self.rng = rng
        self.challenges = []
        self.target = g.field(0)
        self.rejection = None

    def run(self, sum_rx, challenge_tx, poly_rx):
        """Verifier 쪽 프로토콜을 실행한다.

        Args:
            sum_rx: Receiver: claimed sum H를 받는다
            challenge_tx: Sender: 라운드마다 rᵢ를 보낸다
            poly_rx: Receiver: 라운드마다 gᵢ를 받는다

        Returns:
            True: 수락, False: 거부, None: 채널이 끊겨 판정 없음
        """
        self.challenges = []
        self.rejection = None
        try:
            return self._run(sum_rx, challenge_tx, poly_rx)
        except ChannelDisconnected:
            logger.debug(
                "verifier: prover disconnected after %d round(s)", len(self.challenges)
            )
            return None
        finally:
            challenge_tx.close()
            sum_rx.close()
            poly_rx.close()

    def _run(self, sum_rx, challenge_tx, poly_rx):
        g = self.g
        n = g.num_vars
        field = g.field
        degree_table = build_var_degree_table(g)

        self.target = sum_rx.recv()

        # 변수가 없으면 g는 상수이고 합은 그 상수 자체이다
        if n == 0:
            if self.target != g.evaluate([]):
                return self._reject(Rejection.FINAL_EVALUATION, 0)
            return True

        for i in range(n):
            logger.debug("verifier: round %d", i)
            g_i = poly_rx.recv()

            if g_i.degree() > degree_table[i]:
                return self._reject(Rejection.DEGREE, i)
            if self.target != g_i.evaluate(field(0)) + g_i.evaluate(field(1)):
                return self._reject(Rejection.CONSISTENCY, i)

            challenge = random_field_element(self.rng, field)
            self.challenges.append(challenge)
            logger.debug("verifier: round %d challenge %d", i, int(challenge))
            self.target = g_i.evaluate(challenge)

            if i == n - 1:
                # 오라클 검사: g를 챌린지 점에서 한 번 직접 평가한다
                if self.target != g.evaluate(self.challenges):
                    return self._reject(Rejection.FINAL_EVALUATION, i)
            else:
                challenge_tx.send(challenge)

        return True

    def _reject(self, reason, round_index):
        self.rejection = reason
        logger.info("verifier: rejected in round %d: %s", round_index, reason.value)
        return False
