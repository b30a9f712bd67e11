import pytest

from spnlab.cipher.block import Block
from spnlab.cipher.components_builtin import HEYS_SBOX, perm_heys, perm_present
from spnlab.cipher.layers import PermutationLayer, SubstitutionLayer, invert_table
from spnlab.cipher.registry import ComponentRegistry
from spnlab.errors import ConfigurationError, LengthMismatch, RangeError


def test_inverse_sbox_is_exact():
    layer = SubstitutionLayer(HEYS_SBOX, 4)
    for x in range(16):
        assert layer.inverse_table[layer.table[x]] == x
        assert layer.table[layer.inverse_table[x]] == x


def test_non_bijective_sbox_rejected():
    bad = list(HEYS_SBOX)
    bad[1] = bad[0]
    with pytest.raises(ConfigurationError):
        SubstitutionLayer(tuple(bad), 4)


def test_sbox_wrong_size_rejected():
    with pytest.raises(ConfigurationError):
        SubstitutionLayer(tuple(range(8)), 4)


def test_substitute_applies_per_symbol():
    layer = SubstitutionLayer(HEYS_SBOX, 4)
    assert layer.substitute(0x03A7, 4) == 0xE168
    assert layer.inverse_substitute(0xE168, 4) == 0x03A7
    assert layer.substitute_symbols([0, 3, 10, 7]) == [0xE, 0x1, 0x6, 0x8]
    assert layer.inverse_substitute_symbols([0xE, 0x1, 0x6, 0x8]) == [0, 3, 10, 7]
    with pytest.raises(RangeError):
        layer.inverse_substitute_symbols([16])


def test_substitute_out_of_range_fails_fast():
    layer = SubstitutionLayer(HEYS_SBOX, 4)
    with pytest.raises(RangeError):
        layer.lookup(16)
    with pytest.raises(RangeError):
        layer.inverse_lookup(-1)
    with pytest.raises(RangeError):
        layer.substitute(1 << 16, 4)


def test_heys_permutation_table():
    assert perm_heys(4, 4) == (0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15)


def test_permutation_is_a_scatter():
    # a non-involutive table tells scatter and gather apart
    table = (1, 2, 3, 0)
    layer = PermutationLayer(table)
    # input bit 0 (MSB) lands on position 1
    assert layer.permute(0b1000) == 0b0100
    assert layer.permute_bits([1, 0, 0, 0]) == [0, 1, 0, 0]
    assert layer.inverse_permute_bits([0, 1, 0, 0]) == [1, 0, 0, 0]
    assert layer.inverse_permute(0b0100) == 0b1000


def test_transpose_permutation():
    layer = PermutationLayer(perm_heys(4, 4))
    assert layer.permute(0xE168) == 0x9AA4
    assert layer.inverse_permute(0x9AA4) == 0xE168


@pytest.mark.parametrize("n,m", [(4, 4), (3, 5), (8, 2), (1, 7)])
def test_present_permutation_is_bijective(n, m):
    table = perm_present(n, m)
    inv = invert_table(table)
    layer = PermutationLayer(table)
    for i in range(n * m):
        assert inv[table[i]] == i
    assert layer.inverse_permute(layer.permute(0b1011 % (1 << (n * m)))) == 0b1011 % (1 << (n * m))


def test_non_bijective_permutation_rejected():
    with pytest.raises(ConfigurationError):
        PermutationLayer((0, 1, 1, 3))
    with pytest.raises(ConfigurationError):
        PermutationLayer((0, 1, 2, 4))


def test_permute_bits_width_checked():
    with pytest.raises(LengthMismatch):
        PermutationLayer(perm_heys(4, 4)).permute_bits([0, 1])
    with pytest.raises(LengthMismatch):
        PermutationLayer(perm_heys(4, 4)).inverse_permute_bits([0] * 17)


def test_bit_array_form_matches_integer_form():
    layer = PermutationLayer(perm_present(4, 4))
    value = 0xE168
    bits = [(value >> (15 - i)) & 1 for i in range(16)]
    out = layer.permute_bits(bits)
    assert int("".join(map(str, out)), 2) == layer.permute(value)
    assert layer.inverse_permute_bits(out) == bits


def test_block_level_wrappers():
    sub = SubstitutionLayer(HEYS_SBOX, 4)
    perm = PermutationLayer(perm_heys(4, 4))
    b = Block(0x03A7, 4, 4)
    assert sub.substitute_block(b).value == 0xE168
    assert perm.permute_block(sub.substitute_block(b)).value == 0x9AA4
    assert sub.inverse_substitute_block(sub.substitute_block(b)) == b
    assert perm.inverse_permute_block(perm.permute_block(b)) == b


@pytest.mark.parametrize("comp_id", ComponentRegistry().list_ids("SBOX"))
def test_registered_sboxes_are_bijective(comp_id):
    comp = ComponentRegistry().get(comp_id)
    SubstitutionLayer(comp.build(comp.symbol_bits or 4), comp.symbol_bits or 4)


def test_fixed_width_sbox_refuses_other_n():
    with pytest.raises(ConfigurationError):
        ComponentRegistry().get("sbox.heys").build(3)
