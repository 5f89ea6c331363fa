"""
Sum-check Verifier 테스트
==========================

차수 표, 라운드별 검사(차수 상한, 일관성, 최종 오라클 평가),
채널 중단 시 동작을 테스트한다. Prover 역할은 테스트 스레드가
직접 채널로 메시지를 보내 흉내 낸다.
"""

import random
import threading
import pytest

from ips.field import FR
from ips.sumcheck.channel import channel, ChannelDisconnected
from ips.sumcheck.polynomial import UniPolynomial, MultiPolynomial
from ips.sumcheck.verifier import Verifier, Rejection, build_var_degree_table


# ---------------------------------------------------------------------------
# build_var_degree_table
# ---------------------------------------------------------------------------

class TestDegreeTable:
    def test_simple(self, simple_poly):
        assert build_var_degree_table(simple_poly) == [1, 1]

    def test_max_exponent_per_variable(self):
        g = MultiPolynomial(3, [(1, [(0, 1), (1, 2)]), (1, [(1, 1)]), (1, [(0, 3)])])
        assert build_var_degree_table(g) == [3, 2, 0]

    def test_absent_variables_are_zero(self):
        g = MultiPolynomial(4, [(5, [])])
        assert build_var_degree_table(g) == [0, 0, 0, 0]

    def test_random_polynomials(self, random_polynomial):
        for seed in range(5):
            g = random_polynomial(n_vars=5, n_terms=10, seed=seed)
            table = build_var_degree_table(g)
            for v in range(g.num_vars):
                powers = [p for _, term in g.terms for var, p in term if var == v]
                assert table[v] == max(powers, default=0)


# ---------------------------------------------------------------------------
# Verifier.run(): 수동으로 흉내 낸 Prover
# ---------------------------------------------------------------------------

class _ScriptedExchange:
    """Verifier를 스레드에서 실행하고 테스트가 Prover 쪽 끝점을 조작한다."""

    def __init__(self, verifier):
        self.sum_tx, sum_rx = channel()
        self.poly_tx, poly_rx = channel()
        challenge_tx, self.challenge_rx = channel()
        self.result = {}

        def target():
            self.result["value"] = verifier.run(sum_rx, challenge_tx, poly_rx)

        self.thread = threading.Thread(target=target, daemon=True)
        self.thread.start()

    def verdict(self):
        self.thread.join(timeout=5)
        assert not self.thread.is_alive()
        return self.result["value"]


class TestVerifierChecks:
    def test_accepts_honest_messages(self, simple_poly):
        verifier = Verifier(simple_poly, rng=random.Random(1))
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(3))
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1}))
        r0 = ex.challenge_rx.recv()
        ex.poly_tx.send(UniPolynomial({1: r0 + FR(1)}))

        assert ex.verdict() is True
        assert verifier.rejection is None
        assert len(verifier.challenges) == 2
        assert verifier.challenges[0] == r0
        assert verifier.target == simple_poly.evaluate(verifier.challenges)

    def test_rejects_degree_overflow(self, simple_poly):
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(3))
        # 1 + X + X² : 일관성은 맞지 않아도 차수 검사가 먼저 실패한다
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1, 2: 1}))

        assert ex.verdict() is False
        assert verifier.rejection is Rejection.DEGREE
        assert verifier.challenges == []

    def test_rejects_inconsistent_sum(self, simple_poly):
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(4))
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1}))

        assert ex.verdict() is False
        assert verifier.rejection is Rejection.CONSISTENCY

    def test_rejects_wrong_final_round(self, simple_poly):
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(3))
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1}))
        r0 = ex.challenge_rx.recv()
        # g1(0) + g1(1) = g0(r0) 를 만족하지만 g(r0, X)와는 다른 다항식
        target = FR(1) + r0
        ex.poly_tx.send(UniPolynomial({0: target}) * (FR(1) / FR(2)))

        assert ex.verdict() is False
        assert verifier.rejection is Rejection.FINAL_EVALUATION

    def test_no_challenge_after_last_round(self):
        g = MultiPolynomial(1, [(1, [(0, 1)])])
        verifier = Verifier(g)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(1))
        ex.poly_tx.send(UniPolynomial({1: 1}))

        assert ex.verdict() is True
        assert len(verifier.challenges) == 1

    def test_zero_variable_polynomial(self):
        g = MultiPolynomial(0, [(9, [])])

        ex = _ScriptedExchange(Verifier(g))
        ex.sum_tx.send(FR(9))
        assert ex.verdict() is True

        verifier = Verifier(g)
        ex = _ScriptedExchange(verifier)
        ex.sum_tx.send(FR(8))
        assert ex.verdict() is False
        assert verifier.rejection is Rejection.FINAL_EVALUATION


class TestVerifierAbort:
    def test_no_verdict_when_prover_disappears(self, simple_poly):
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(3))
        ex.poly_tx.close()

        assert ex.verdict() is None
        assert verifier.rejection is None

    def test_no_verdict_when_prover_stops_listening(self, simple_poly):
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(3))
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1}))
        ex.challenge_rx.close()

        assert ex.verdict() is None

    def test_challenge_channel_closed_after_rejection(self, simple_poly):
        """거부 후 Verifier는 챌린지 채널을 닫아 Prover를 깨운다."""
        verifier = Verifier(simple_poly)
        ex = _ScriptedExchange(verifier)

        ex.sum_tx.send(FR(4))
        ex.poly_tx.send(UniPolynomial({0: 1, 1: 1}))
        assert ex.verdict() is False

        with pytest.raises(ChannelDisconnected):
            ex.challenge_rx.recv()
