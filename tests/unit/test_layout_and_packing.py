import numpy as np
import pytest

from symbolnet.core.packing import CoefCodec
from symbolnet.core.types import NetLayout


def test_layout_shapes_include_bias_row():
    layout = NetLayout([3, 4, 2])
    assert layout.coefs_count == 2
    assert layout.input_size == 3
    assert layout.output_size == 2
    assert layout.coef_shapes == [(4, 4), (5, 2)]
    assert layout.dimensions_count == 4 * 4 + 5 * 2


def test_layout_is_immutable_and_hashable():
    layout = NetLayout([2, 3])
    with pytest.raises(Exception):
        layout.layer_sizes = (4, 5)  # type: ignore[misc]
    assert layout == NetLayout((2, 3))
    assert hash(layout) == hash(NetLayout([2, 3]))


@pytest.mark.parametrize(
    "sizes", [[], [5], [3, 0, 2], [-1, 2], [2.5, 3], [2.7, 3.9], [True, 2], ["3", 2]]
)
def test_layout_rejects_invalid_sizes(sizes):
    with pytest.raises(ValueError):
        NetLayout(sizes)


def test_coef_shape_index_out_of_range():
    with pytest.raises(IndexError):
        NetLayout([2, 2]).coef_shape(1)


def test_unpack_then_pack_is_identity():
    layout = NetLayout([5, 7, 3, 4])
    codec = CoefCodec(layout)
    rng = np.random.default_rng(0)
    point = rng.standard_normal(codec.dimensions) * 1e3
    restored = codec.pack(codec.unpack(point))
    assert np.array_equal(restored, point)


def test_pack_unpack_pack_is_bit_identical():
    codec = CoefCodec(NetLayout([3, 4, 2]))
    rng = np.random.default_rng(1)
    matrices = [rng.standard_normal(shape) for shape in codec.layout.coef_shapes]
    packed = codec.pack(matrices)
    again = codec.pack(codec.unpack(packed))
    assert packed.tobytes() == again.tobytes()
    for original, unpacked in zip(matrices, codec.unpack(packed)):
        assert np.array_equal(original, unpacked)


def test_packing_order_is_layer_then_column_major():
    codec = CoefCodec(NetLayout([1, 2, 1]))
    W0 = np.array([[1.0, 2.0], [3.0, 4.0]])
    W1 = np.array([[5.0], [6.0], [7.0]])
    packed = codec.pack([W0, W1])
    assert packed.tolist() == [1.0, 3.0, 2.0, 4.0, 5.0, 6.0, 7.0]


def test_unpack_into_reuses_buffers():
    codec = CoefCodec(NetLayout([2, 3]))
    buffers = codec.allocate()
    point = np.arange(codec.dimensions, dtype=np.float64)
    result = codec.unpack_into(point, buffers)
    assert result[0] is buffers[0]
    assert buffers[0][0, 1] == 3.0


def test_unpack_does_not_alias_point():
    codec = CoefCodec(NetLayout([2, 2]))
    point = np.zeros(codec.dimensions)
    matrices = codec.unpack(point)
    matrices[0][...] = 9.0
    assert not point.any()


def test_unpack_rejects_wrong_length():
    codec = CoefCodec(NetLayout([3, 4, 2]))
    with pytest.raises(ValueError):
        codec.unpack(np.zeros(codec.dimensions - 1))
    with pytest.raises(ValueError):
        codec.unpack(np.zeros((1, codec.dimensions)))


def test_pack_rejects_mismatched_shapes():
    codec = CoefCodec(NetLayout([3, 4, 2]))
    with pytest.raises(ValueError):
        codec.pack([np.zeros((4, 4))])
    with pytest.raises(ValueError):
        codec.pack([np.zeros((4, 4)), np.zeros((2, 5))])
    with pytest.raises(ValueError):
        codec.pack_into([np.zeros((4, 4)), np.zeros((5, 2))], np.zeros(3))


def test_layout_accepts_integral_numbers():
    assert NetLayout([3.0, np.int64(2)]).layer_sizes == (3, 2)
