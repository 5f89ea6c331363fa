"""
Sum-check 프로토콜 실행기
==========================

Prover와 Verifier를 세 개의 랑데부 채널로 연결하고, 각 역할을 독립된
실행 단위로 돌린다.

  - Prover   : 별도 스레드
  - Verifier : 호출한 스레드 (판정 결과를 반환하기 위해)

두 역할은 같은 다항식 정의를 각자 들고 있을 뿐 공유하는 가변 상태가 없다.
Verifier가 일찍 거부하고 끝나면 자신의 채널 끝점을 닫으므로, Prover는
다음 블로킹 연산에서 ChannelDisconnected를 받고 조용히 종료한다.

사용 예시:
    >>> g = MultiPolynomial(2, [(1, [(0, 1), (1, 1)]), (1, [(1, 1)])])
    >>> run_protocol(g, FR(3))   # True
    >>> run_protocol(g, FR(4))   # False
"""

import logging
import threading

from ips.sumcheck.channel import channel
from ips.sumcheck.prover import Prover
from ips.sumcheck.verifier import Verifier

logger = logging.getLogger(__name__)


def run_protocol(g, claimed_sum, rng=None, prover=None, verifier=None):
    """sum-check 프로토콜을 한 번 실행하고 Verifier의 판정을 반환한다.

    Args:
        g: MultiPolynomial
        claimed_sum: Prover가 주장하는 합
        rng: Verifier 챌린지용 난수 생성기 (prover/verifier를 직접 주면 무시)
        prover: Prover 대체 객체 (예: 테스트용 부정직한 Prover)
        verifier: Verifier 대체 객체

    Returns:
        True(수락) / False(거부) / None(통신 중단)
    """
    if prover is None:
        prover = Prover(g)
    if verifier is None:
        verifier = Verifier(g, rng)

    sum_tx, sum_rx = channel()
    poly_tx, poly_rx = channel()
    challenge_tx, challenge_rx = channel()

    prover_thread = threading.Thread(
        target=prover.run,
        args=(claimed_sum, sum_tx, poly_tx, challenge_rx),
        name="sumcheck-prover",
        daemon=True,
    )
    prover_thread.start()
    try:
        verdict = verifier.run(sum_rx, challenge_tx, poly_rx)
    finally:
        prover_thread.join()

    logger.debug("sum-check over %d variable(s): verdict=%s", g.num_vars, verdict)
    return verdict
