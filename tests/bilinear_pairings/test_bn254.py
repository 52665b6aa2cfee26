from dataclasses import dataclass

import pytest
from py_ecc.bn128 import G1, G2, add, double, multiply, neg

from zkrounds.bilinear_pairings.bn254.bn254 import bn254
from zkrounds.bilinear_pairings.bn254.fields import COEFF_B, TWIST_MUL_BY_Q_X, TWIST_MUL_BY_Q_Y, Fq6, Fq12
from zkrounds.bilinear_pairings.bn254.final_exponentiation import easy_exponentiation, final_exponentiation
from zkrounds.bilinear_pairings.bn254.line_functions import G2HomProjective, addition_step, doubling_step, mul_by_char
from zkrounds.bilinear_pairings.bn254.parameters import ATE_LOOP_COUNT, N_ELL_COEFFICIENTS, X, X_NAF, q, r
from zkrounds.fields.fq2 import fq2, fq2_to_list, inverse
from zkrounds.util.utility_functions import find_naf, naf_to_ternary, ternary_to_int


@dataclass
class Bn254:
    g1 = G1
    g2 = G2

    # Generated with secrets.randbelow(r - 1) + 1
    P_ = 3848206219466937412106620298493214232016587271718154869458658498812355213416
    Q_ = 19076408364592287640297233451396036563829216404154359373826618463693101227040

    P = multiply(G1, P_)
    Q = multiply(G2, Q_)

    f6 = Fq6(
        fq2(
            20925091368075991963132407952916453596237117852799702412141988931506241672722,
            18684276579894497974780190092329868933855710870485375969907530111657029892231,
        ),
        fq2(
            5932690455294482368858352783906317764044134926538780366070347507990829997699,
            18684276579894497974780190092329868933855710870485375969907530111657029892231,
        ),
        fq2(
            18684276579894497974780190092329868933855710870485375969907530111657029892231,
            19526707366532583397322534596786476145393586591811230548888354920504818678603,
        ),
    )
    f12 = Fq12(f6, f6)

    test_data = {
        "test_bilinearity": [
            {"p": P, "q": Q, "a": 2, "b": 3},
            {"p": G1, "q": G2, "a": 5, "b": 1},
        ],
        "test_doubling_step": [{"q": G2}, {"q": Q}],
        "test_addition_step": [{"q": G2, "k": 2}, {"q": Q, "k": 5}],
    }


def generate_test_cases(test_name):
    configurations = [Bn254]

    return [
        (config, *test_data.values())
        for config in configurations
        if test_name in config.test_data
        for test_data in config.test_data[test_name]
    ]


def to_affine(point: G2HomProjective):
    z_inverse = inverse(point.z)
    return (point.x * z_inverse, point.y * z_inverse)


def g2_to_list(point):
    return [fq2_to_list(point[0]), fq2_to_list(point[1])]


def test_ate_loop_count():
    assert len(ATE_LOOP_COUNT) == 65
    assert sum(digit * 2**i for i, digit in enumerate(ATE_LOOP_COUNT)) == 6 * X + 2


def test_x_naf():
    assert list(X_NAF) == naf_to_ternary(find_naf(X))
    assert ternary_to_int(X_NAF) == X


def test_n_ell_coefficients():
    assert N_ELL_COEFFICIENTS == 91
    assert len(bn254.prepare_g2(G2)) == N_ELL_COEFFICIENTS


def test_constants():
    assert fq2_to_list(COEFF_B) == [
        19485874751759354771024239261021720505790618469301721065564631296452457478373,
        266929791119991161246907387137283842545076965332900288569378510910307636690,
    ]
    assert fq2_to_list(TWIST_MUL_BY_Q_X) == [
        21575463638280843010398324269430826099269044274347216827212613867836435027261,
        10307601595873709700152284273816112264069230130616436755625194854815875713954,
    ]
    assert fq2_to_list(TWIST_MUL_BY_Q_Y) == [
        2821565182194536844548159561693502659359617185244120367078079554186484126554,
        3505843767911556378687030309984248845540243509899259641013678093033130930403,
    ]


@pytest.mark.parametrize(("config", "q"), generate_test_cases("test_doubling_step"))
def test_doubling_step(config, q):
    new_r, _ = doubling_step(G2HomProjective.from_affine(q))
    assert g2_to_list(to_affine(new_r)) == g2_to_list(double(q))


@pytest.mark.parametrize(("config", "q", "k"), generate_test_cases("test_addition_step"))
def test_addition_step(config, q, k):
    new_r, _ = addition_step(G2HomProjective.from_affine(multiply(q, k)), q)
    assert g2_to_list(to_affine(new_r)) == g2_to_list(multiply(q, k + 1))


@pytest.mark.parametrize("config", [Bn254])
def test_mul_by_char_is_multiplication_by_q(config):
    assert g2_to_list(mul_by_char(config.Q)) == g2_to_list(multiply(config.Q, q % r))


@pytest.mark.parametrize("config", [Bn254])
def test_prepare_infinity(config):
    with pytest.raises(ValueError):
        bn254.prepare_g2(None)


@pytest.mark.parametrize(("config", "p", "q", "a", "b"), generate_test_cases("test_bilinearity"))
def test_bilinearity(config, p, q, a, b):
    e = bn254.pairing(p, q)
    assert bn254.pairing(multiply(p, a), multiply(q, b)) == e ** (a * b)
    assert bn254.pairing(multiply(p, a * b), q) == bn254.pairing(p, multiply(q, a * b))


@pytest.mark.parametrize("config", [Bn254])
def test_non_degeneracy(config):
    e = bn254.pairing(config.g1, config.g2)
    assert not e.is_one()
    assert (e**r).is_one()


@pytest.mark.parametrize("config", [Bn254])
def test_multi_pairing(config):
    assert bn254.multi_pairing([(config.P, config.Q), (neg(config.P), config.Q)]).is_one()
    assert bn254.multi_pairing([(config.P, config.Q), (config.P, config.g2)]) == bn254.pairing(
        config.P, add(config.Q, config.g2)
    )
    assert bn254.multi_pairing([(None, config.Q), (config.P, None)]).is_one()


@pytest.mark.parametrize("config", [Bn254])
def test_final_exponentiation(config):
    out = final_exponentiation(config.f12)
    assert (out**r).is_one()
    # Elements of F_q^6 are sent to one
    assert final_exponentiation(config.f12 * Fq12(config.f6, Fq6.zero())) == out
    assert bn254.final_exponentiation(config.f12) == out


@pytest.mark.parametrize("config", [Bn254])
def test_easy_exponentiation(config):
    out = easy_exponentiation(config.f12)
    assert out ** (q**4 - q**2 + 1) == Fq12.one()
