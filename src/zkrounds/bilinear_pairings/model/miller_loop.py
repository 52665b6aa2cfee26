"""Miller loop of the optimal Ate pairing on curves with a sextic twist of type D."""


class MillerLoop:
    """Miller loop operation."""

    def prepare_g2(self, q) -> tuple:
        """Precompute the line coefficients of the Miller loop for the G2 point `q`.

        The coefficients are listed in the order they are consumed by the Miller loop: for every digit of the loop
        (most significant first, the leading digit excluded) the coefficients of the doubling step, followed by the
        coefficients of the addition step if the digit is non-zero; the last two entries are the coefficients of the
        additions of `pi(q)` and `-pi^2(q)`, where `pi` is the untwist-Frobenius-twist endomorphism.

        Args:
            q: An affine point on the twisted curve, as a pair of elements of F_q^2.

        Returns:
            The tuple of line coefficients.

        Raises:
            ValueError: If `q` is the point at infinity.
        """
        if q is None:
            msg = "Cannot prepare the point at infinity"
            raise ValueError(msg)

        neg_q = (q[0], -q[1])
        r = self.projective_from_affine(q)
        coefficients = []
        for digit in reversed(self.exp_miller_loop[:-1]):
            r, coefficient = self.doubling_step(r)
            coefficients.append(coefficient)
            if digit == 1:
                r, coefficient = self.addition_step(r, q)
                coefficients.append(coefficient)
            elif digit == -1:
                r, coefficient = self.addition_step(r, neg_q)
                coefficients.append(coefficient)

        q1 = self.mul_by_char(q)
        q2 = self.mul_by_char(q1)
        if self.X_IS_NEGATIVE:
            r = r._replace(y=-r.y)
        q2 = (q2[0], -q2[1])
        r, coefficient = self.addition_step(r, q1)
        coefficients.append(coefficient)
        _, coefficient = self.addition_step(r, q2)
        coefficients.append(coefficient)
        return tuple(coefficients)

    def miller_loop(self, pairs: list) -> object:
        """Compute the product of the Miller loops of `pairs`.

        Args:
            pairs (list): A list of couples `(p, coefficients)`, where `p` is an affine point on the base curve and
                `coefficients` are the line coefficients of a G2 point as returned by `prepare_g2`. Couples whose
                `p` is the point at infinity are skipped.

        Returns:
            The Miller loop output, an element of F_q^12.
        """
        pairs = [(p, iter(coefficients)) for p, coefficients in pairs if p is not None]
        f = self.FQ12.one()
        n_digits = len(self.exp_miller_loop)
        for i in range(n_digits - 1, 0, -1):
            if i != n_digits - 1:
                f = f.square()
            for p, coefficients in pairs:
                f = self.ell(f, next(coefficients), p)
            if self.exp_miller_loop[i - 1] != 0:
                for p, coefficients in pairs:
                    f = self.ell(f, next(coefficients), p)

        if self.X_IS_NEGATIVE:
            f = f.conjugate()

        for _ in range(2):
            for p, coefficients in pairs:
                f = self.ell(f, next(coefficients), p)
        return f
