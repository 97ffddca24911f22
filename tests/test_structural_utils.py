import pytest

from simcheck.utils.errors import AlgorithmUnavailable
from simcheck.utils.structural_utils import python_fingerprint, structural_similarity

from samples import ADD_A, ADD_B

DEEPLY_NESTED = "x = " + "[" * 150 + "]" * 150 + "\ny = " + "-" * 3000 + "1"


def test_renamed_identifiers_share_structure():
    assert structural_similarity(python_fingerprint(ADD_A), python_fingerprint(ADD_B)) == 1.0


@pytest.mark.parametrize("text", [
    "",
    "apples",
    "apples, oranges",
    "a - b",
    '"""just a docstring"""',
])
def test_bare_expressions_carry_no_structure(text):
    with pytest.raises(AlgorithmUnavailable):
        python_fingerprint(text)


@pytest.mark.parametrize("text", [DEEPLY_NESTED, "-" * 100000 + "1"])
def test_deeply_nested_input_is_unavailable(text):
    with pytest.raises(AlgorithmUnavailable):
        python_fingerprint(text)


def test_prose_is_unavailable():
    with pytest.raises(AlgorithmUnavailable):
        python_fingerprint("completely unrelated text sample")
