"""
Sum-check 통신 채널: 버퍼 없는 랑데부(Rendezvous) 채널
=======================================================

Prover와 Verifier는 서로 다른 스레드에서 실행되며, 오직 세 개의 단방향
채널로만 통신한다.

  ┌──────────┐   sum (1회)            ┌──────────┐
  │          │ ─────────────────────▶ │          │
  │  Prover  │   g_i (n회)            │ Verifier │
  │          │ ─────────────────────▶ │          │
  │          │   r_i (n-1회)          │          │
  │          │ ◀───────────────────── │          │
  └──────────┘                        └──────────┘

**랑데부 의미론 (capacity = 0)**:
  - send()는 상대가 recv()로 값을 가져갈 때까지 블록된다
  - recv()는 상대가 send()할 때까지 블록된다
  → 두 역할이 라운드 단위로 정확히 번갈아 진행된다 (lock-step)

**연결 끊김 (disconnect)**:
  한쪽이 close()하면 상대의 다음 블로킹 연산은 ChannelDisconnected를
  발생시킨다. 예를 들어 Verifier가 라운드 0에서 거부하고 종료하면,
  Prover의 다음 send/recv가 실패하고 Prover는 조용히 종료한다.

사용 예시:
    >>> tx, rx = channel()
    >>> # 스레드 A: tx.send(FR(3))
    >>> # 스레드 B: rx.recv()  → FR(3)
"""

import threading


class ChannelDisconnected(Exception):
    """상대 끝점이 닫혀 더 이상 통신할 수 없을 때 발생한다."""


class _Rendezvous:
    """송신자 하나와 수신자 하나가 공유하는 랑데부 상태."""

    def __init__(self):
        self.cond = threading.Condition()
        self.item = None
        self.has_item = False
        self.sent = 0
        self.received = 0
        self.sender_open = True
        self.receiver_open = True

    def send(self, item):
        with self.cond:
            while self.has_item and self.receiver_open:
                self.cond.wait()
            if not self.receiver_open:
                raise ChannelDisconnected("receiver is closed")
            self.item = item
            self.has_item = True
            self.sent += 1
            ticket = self.sent
            self.cond.notify_all()

            # 수신자가 값을 가져갈 때까지 대기 (버퍼 0)
            while self.received < ticket and self.receiver_open:
                self.cond.wait()
            if self.received < ticket:
                # 전달되지 못한 값은 회수한다
                self.item = None
                self.has_item = False
                raise ChannelDisconnected("receiver closed before taking the item")

    def recv(self):
        with self.cond:
            while not self.has_item and self.sender_open and self.receiver_open:
                self.cond.wait()
            if not self.has_item:
                raise ChannelDisconnected("sender is closed")
            item = self.item
            self.item = None
            self.has_item = False
            self.received += 1
            self.cond.notify_all()
            return item

    def close_sender(self):
        with self.cond:
            self.sender_open = False
            self.cond.notify_all()

    def close_receiver(self):
        with self.cond:
            self.receiver_open = False
            self.cond.notify_all()


class Sender:
    """채널의 송신 끝점."""

    def __init__(self, state):
        self._state = state

    def send(self, item):
        """item을 보내고 수신될 때까지 블록한다.

        Raises:
            ChannelDisconnected: 수신자가 이미 닫혔거나 값을 받기 전에 닫힌 경우
        """
        self._state.send(item)

    def close(self):
        """송신 끝점을 닫는다. 대기 중인 수신자는 ChannelDisconnected를 받는다."""
        self._state.close_sender()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class Receiver:
    """채널의 수신 끝점."""

    def __init__(self, state):
        self._state = state

    def recv(self):
        """값이 도착할 때까지 블록하고, 받은 값을 반환한다.

        Raises:
            ChannelDisconnected: 송신자가 닫혀 더 이상 값이 오지 않는 경우
        """
        return self._state.recv()

    def close(self):
        """수신 끝점을 닫는다. 대기 중인 송신자는 ChannelDisconnected를 받는다."""
        self._state.close_receiver()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def channel():
    """버퍼 없는(capacity = 0) 랑데부 채널을 생성한다.

    Returns:
        (Sender, Receiver) 튜플
    """
    state = _Rendezvous()
    return Sender(state), Receiver(state)
