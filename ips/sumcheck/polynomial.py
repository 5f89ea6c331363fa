"""
Sum-check 기반 모듈: 희소(Sparse) 다항식 클래스
=================================================

sum-check 프로토콜에서 주고받는 두 종류의 다항식을 정의한다.

**MultiPolynomial (다변수 희소 다항식)**:
  g(x₀, ..., x_{n-1}) = Σ cₖ · ∏ x_v^{e_v}
  - 0이 아닌 항(term)만 저장: [(계수, 항), ...]
  - 항은 (변수 인덱스, 양의 지수) 쌍의 튜플, 변수 인덱스 순으로 정렬
  - 생성 시 같은 항끼리 합치고 계수가 0인 항을 제거한다
  - 프로토콜 실행 동안 변경되지 않는다 (Prover와 Verifier가 각자 읽기만 함)

**UniPolynomial (일변수 희소 다항식)**:
  gᵢ(X) = Σ c_d · X^d
  - {차수: 계수} 딕셔너리로 저장
  - 매 라운드 Prover → Verifier로 전송되는 라운드 다항식의 표현

사용 예시:
    >>> g = MultiPolynomial(2, [(1, [(0, 1), (1, 1)]), (1, [(1, 1)])])  # x₀x₁ + x₁
    >>> g.evaluate([FR(2), FR(3)])   # 6 + 3 = FR(9)
    >>> p = UniPolynomial({0: 1, 2: 3})   # 1 + 3X²
    >>> p.evaluate(FR(2))            # FR(13)
"""

from ips.field import FR


# ─────────────────────────────────────────────────────────────────────
# UniPolynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class UniPolynomial:
    """유한체 위의 일변수 희소 다항식.

    coeffs = {d: c_d} → Σ c_d · X^d  (c_d ≠ 0 인 항만 보관)

    sum-check에서의 역할:
    - 라운드 i의 gᵢ(Xᵢ): 앞 변수는 챌린지로 고정, 뒤 변수는 {0,1}에서 합산
    - Verifier는 gᵢ(0) + gᵢ(1) == target 과 차수 상한을 확인한다

    예시:
        >>> p = UniPolynomial({1: 2})        # 2X
        >>> q = UniPolynomial({0: 1, 1: 3})  # 1 + 3X
        >>> p + q                            # Poly(1 + 5*x)
    """

    def __init__(self, terms=None, field=FR):
        """다항식 생성.

        Args:
            terms: {차수: 계수} 딕셔너리 또는 (차수, 계수) 쌍의 리스트.
                   같은 차수가 여러 번 나오면 계수를 더한다.
                   None이면 영 다항식을 생성한다.
            field: 계수의 FQ 서브클래스 (기본값: FR)
        """
        self.field = field
        if terms is None:
            terms = []
        elif isinstance(terms, dict):
            terms = terms.items()

        coeffs = {}
        for degree, coeff in terms:
            if degree < 0:
                raise ValueError(f"차수는 0 이상이어야 합니다: {degree}")
            coeff = coeff if isinstance(coeff, field) else field(coeff)
            if degree in coeffs:
                coeffs[degree] = coeffs[degree] + coeff
            else:
                coeffs[degree] = coeff
        zero = field(0)
        self.coeffs = {d: c for d, c in sorted(coeffs.items()) if c != zero}

    @classmethod
    def zero(cls, field=FR):
        """영 다항식 p(X) = 0."""
        return cls(None, field)

    @classmethod
    def from_coefficients_vec(cls, terms, field=FR):
        """(차수, 계수) 쌍의 리스트로부터 다항식을 만든다."""
        return cls(list(terms), field)

    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        if not self.coeffs:
            return 0
        return max(self.coeffs)

    def is_zero(self):
        """영 다항식인지 확인."""
        return not self.coeffs

    def terms(self):
        """(차수, 계수) 쌍을 차수 오름차순으로 반환한다."""
        return list(self.coeffs.items())

    def coefficient(self, degree):
        """X^degree 의 계수 (없으면 0)."""
        return self.coeffs.get(degree, self.field(0))

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다.

        Args:
            point: 필드 원소 또는 정수

        Returns:
            필드 원소: p(point)

        예시:
            >>> UniPolynomial({0: 1, 2: 3}).evaluate(FR(2))  # 1 + 12 = FR(13)
        """
        if not isinstance(point, self.field):
            point = self.field(point)
        result = self.field(0)
        for degree, coeff in self.coeffs.items():
            result = result + coeff * point ** degree
        return result

    def _coerce(self, other):
        if isinstance(other, UniPolynomial):
            return other
        if isinstance(other, (int, self.field)):
            return UniPolynomial({0: other}, self.field)
        return None

    def __add__(self, other):
        """다항식 덧셈: 같은 차수의 계수를 합친다."""
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return UniPolynomial(self.terms() + other.terms(), self.field)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        """다항식 부호 반전: -p(X)."""
        return UniPolynomial({d: -c for d, c in self.coeffs.items()}, self.field)

    def __sub__(self, other):
        """다항식 뺄셈: p(X) - q(X)."""
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __mul__(self, other):
        """스칼라곱: 각 계수에 스칼라를 곱한다."""
        if not isinstance(other, (int, self.field)):
            return NotImplemented
        return UniPolynomial({d: c * other for d, c in self.coeffs.items()}, self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        """다항식 동등 비교."""
        other = self._coerce(other)
        if other is None:
            return False
        return self.terms() == other.terms()

    def __repr__(self):
        terms = []
        for d, c in self.coeffs.items():
            if d == 0:
                terms.append(str(int(c)))
            elif d == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{d}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"


# ─────────────────────────────────────────────────────────────────────
# MultiPolynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class MultiPolynomial:
    """유한체 위의 다변수 희소 다항식.

    terms = [(c, ((v₁, e₁), (v₂, e₂), ...)), ...]
          → Σ c · x_{v₁}^{e₁} · x_{v₂}^{e₂} · ...

    상수항은 빈 튜플 ()로 표현한다.

    속성:
        num_vars: 변수 개수 n (변수 인덱스는 0..n-1)
        terms: (계수, 항) 리스트. 항의 사전식 순서로 정렬되어 있다.
        field: 계수의 FQ 서브클래스

    예시 (x₀x₁ + x₁):
        >>> g = MultiPolynomial(2, [(1, [(0, 1), (1, 1)]), (1, [(1, 1)])])
        >>> g.num_vars       # 2
        >>> len(g.terms)     # 2
    """

    def __init__(self, num_vars, terms, field=FR):
        """다항식 생성.

        Args:
            num_vars: 변수 개수 (0 이상)
            terms: (계수, 항) 쌍의 iterable. 항은 (변수, 지수) 쌍의
                   iterable 또는 {변수: 지수} 딕셔너리.
            field: 계수의 FQ 서브클래스 (기본값: FR)

        Raises:
            ValueError: 변수 인덱스가 범위를 벗어나거나 지수가 음수인 경우
        """
        if num_vars < 0:
            raise ValueError(f"변수 개수는 0 이상이어야 합니다: {num_vars}")
        self.num_vars = num_vars
        self.field = field

        merged = {}
        for coeff, term in terms:
            term = self._normalize_term(term)
            coeff = coeff if isinstance(coeff, field) else field(coeff)
            if term in merged:
                merged[term] = merged[term] + coeff
            else:
                merged[term] = coeff
        zero = field(0)
        self.terms = [(c, t) for t, c in sorted(merged.items()) if c != zero]

    def _normalize_term(self, term):
        """항을 (변수, 지수) 튜플로 정규화한다. 같은 변수의 지수는 더한다."""
        if isinstance(term, dict):
            term = term.items()
        powers = {}
        for var, power in term:
            if not 0 <= var < self.num_vars:
                raise ValueError(
                    f"변수 인덱스 {var}가 범위 [0, {self.num_vars})를 벗어났습니다"
                )
            if power < 0:
                raise ValueError(f"지수는 0 이상이어야 합니다: x_{var}^{power}")
            if power == 0:
                continue
            powers[var] = powers.get(var, 0) + power
        return tuple(sorted(powers.items()))

    @classmethod
    def from_coefficients_vec(cls, num_vars, terms, field=FR):
        """(계수, 항) 쌍의 리스트로부터 다항식을 만든다."""
        return cls(num_vars, terms, field)

    def degree(self):
        """전체 차수 (항별 지수 합의 최댓값)."""
        return max((sum(p for _, p in term) for _, term in self.terms), default=0)

    def evaluate(self, point):
        """다항식을 점 (x₀, ..., x_{n-1})에서 평가한다.

        Args:
            point: 길이 num_vars의 필드 원소(또는 정수) 리스트

        Returns:
            필드 원소: g(point)

        Raises:
            ValueError: point 길이가 num_vars와 다를 때
        """
        if len(point) != self.num_vars:
            raise ValueError(
                f"평가 점의 길이 {len(point)}가 변수 개수 {self.num_vars}와 다릅니다"
            )
        point = [x if isinstance(x, self.field) else self.field(x) for x in point]
        result = self.field(0)
        for coeff, term in self.terms:
            value = coeff
            for var, power in term:
                value = value * point[var] ** power
            result = result + value
        return result

    def __eq__(self, other):
        if not isinstance(other, MultiPolynomial):
            return False
        return self.num_vars == other.num_vars and self.terms == other.terms

    def __repr__(self):
        parts = []
        for coeff, term in self.terms:
            monomial = "*".join(
                f"x{var}" if power == 1 else f"x{var}^{power}" for var, power in term
            )
            if not monomial:
                parts.append(str(int(coeff)))
            elif coeff == self.field(1):
                parts.append(monomial)
            else:
                parts.append(f"{int(coeff)}*{monomial}")
        body = " + ".join(parts) if parts else "0"
        return f"MultiPoly(n={self.num_vars}: {body})"
