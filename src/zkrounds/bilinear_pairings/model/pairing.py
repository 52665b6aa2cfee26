"""Bilinear pairings."""


class Pairing:
    """Pairing class."""

    def pairing(self, p, q):
        """Bilinear pairing `e(p, q)`.

        Args:
            p: An affine point on the base curve, `None` for the point at infinity.
            q: An affine point on the twisted curve, `None` for the point at infinity.

        Returns:
            The pairing `e(p, q)`, an element of F_q^12.
        """
        return self.multi_pairing([(p, q)])

    def multi_pairing(self, pairs: list):
        """Product of pairings `e(p_1, q_1) * ... * e(p_n, q_n)` sharing a single final exponentiation.

        Pairs containing the point at infinity contribute the identity.
        """
        prepared = [(p, self.prepare_g2(q)) for p, q in pairs if p is not None and q is not None]
        return self.final_exponentiation(self.miller_loop(prepared))
