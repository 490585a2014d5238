"""Real roots of linear, quadratic and cubic polynomials.

The polynomial is a*t**3 + b*t**2 + c*t + d. Callers do not classify the
degree: vanishing leading coefficients are detected here and the equation is
solved at the highest remaining degree. Roots are returned unfiltered, the
caller restricts them to its domain.
"""

import math

DEFAULT_EPSILON = 1e-12


def real_cbrt(value: float) -> float:
    """Real cube root with the sign carried through.

    Args:
        value: Any real number

    Returns:
        The real number r with r**3 == value

    Examples:
        >>> real_cbrt(-8.0)
        -2.0
    """
    if value < 0:
        return -(-value) ** (1.0 / 3.0)
    return value ** (1.0 / 3.0)


def solve_quadratic_or_linear(
    b: float, c: float, d: float, epsilon: float = DEFAULT_EPSILON
) -> list[float]:
    """Solve b*t**2 + c*t + d = 0.

    Args:
        b: Quadratic coefficient
        c: Linear coefficient
        d: Constant term
        epsilon: Tolerance below which a coefficient or the discriminant
            counts as zero

    Returns:
        Two roots for a positive discriminant, one for a vanishing
        discriminant or a linear equation, none otherwise. A fully
        degenerate equation (every t, or no t) has no roots.
    """
    if abs(b) <= epsilon:
        if abs(c) <= epsilon:
            return []
        return [-d / c]

    discriminant = c * c - 4.0 * b * d
    if abs(discriminant) <= epsilon:
        return [-c / (2.0 * b)]
    if discriminant < 0:
        return []

    root = math.sqrt(discriminant)
    return [(-c + root) / (2.0 * b), (-c - root) / (2.0 * b)]


def solve_cubic(
    a: float, b: float, c: float, d: float, epsilon: float = DEFAULT_EPSILON
) -> list[float]:
    """Solve a*t**3 + b*t**2 + c*t + d = 0 for real roots.

    The cubic is normalised to monic form x**3 + p*x**2 + q*x + r and solved
    through its depressed form. With m = 2p**3 - 9pq + 27r, k = p**2 - 3q
    and n = m**2 - 4k**3:

    - n < 0: three distinct real roots, taken with the trigonometric form
      -(p + 2*sqrt(k)*cos((theta + 2*pi*j) / 3)) / 3 where
      theta = atan2(sqrt(-n), m). No complex intermediates are formed.
    - n >= 0: one real root -(p + cbrt((m + sqrt(n)) / 2) + cbrt((m - sqrt(n)) / 2)) / 3.
      When n vanishes the pair of complex roots collapses into a real
      double root, which is returned as well.

    Args:
        a: Cubic coefficient
        b: Quadratic coefficient
        c: Linear coefficient
        d: Constant term
        epsilon: Tolerance for vanishing coefficients and discriminants

    Returns:
        Real roots, unsorted and unfiltered

    Examples:
        >>> sorted(round(t, 9) for t in solve_cubic(1, -6, 11, -6))
        [1.0, 2.0, 3.0]
    """
    if abs(a) <= epsilon:
        return solve_quadratic_or_linear(b, c, d, epsilon)

    p = b / a
    q = c / a
    r = d / a

    m = 2.0 * p**3 - 9.0 * p * q + 27.0 * r
    k = p * p - 3.0 * q
    n = m * m - 4.0 * k**3

    # Discriminant tolerance follows the magnitude of its two terms
    scale = max(m * m, abs(4.0 * k**3), 1.0)

    if n < -epsilon * scale:
        sqrt_k = math.sqrt(k)
        theta = math.atan2(math.sqrt(-n), m)
        return [
            -(p + 2.0 * sqrt_k * math.cos((theta + 2.0 * math.pi * j) / 3.0)) / 3.0
            for j in range(3)
        ]

    root_n = math.sqrt(max(n, 0.0))
    m1 = real_cbrt((m + root_n) / 2.0)
    n1 = real_cbrt((m - root_n) / 2.0)
    single = -(p + m1 + n1) / 3.0

    if abs(n) <= epsilon * scale:
        double = -(p - m1) / 3.0
        if abs(double - single) > math.sqrt(epsilon):
            return [single, double]
    return [single]
