"""
다항식 평가 기반 파일 지문 테스트
"""
from ips.field import FR
from ips.fingerprint import random_r, fingerprint


class TestFingerprint:
    def test_horner(self):
        """1 + 2X + 3X² at X = 2 → 17"""
        assert fingerprint([FR(1), FR(2), FR(3)], FR(2)) == FR(17)

    def test_empty_file(self):
        assert fingerprint([], FR(5)) == FR(0)

    def test_single_element(self):
        assert fingerprint([FR(42)], FR(5)) == FR(42)

    def test_equal_files_match(self, rng):
        data = [FR(rng.randrange(256)) for _ in range(64)]
        r = random_r(rng)
        assert fingerprint(data, r) == fingerprint(list(data), r)

    def test_different_files_differ(self, rng):
        alice = [FR(rng.randrange(256)) for _ in range(64)]
        bob = list(alice)
        bob[17] = bob[17] + FR(1)
        r = random_r(rng)
        assert fingerprint(alice, r) != fingerprint(bob, r)
