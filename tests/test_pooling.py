import io

import numpy as np
import pytest

from talawa.pooling import LayerShape, Pooling2DLayer, PoolingType

RNG = np.random.default_rng(3)


def _batch(batch=2, depth=2, size=4):
    return RNG.normal(size=(batch, depth * size * size)).astype(np.float32)


def test_output_shape_and_flat():
    layer = Pooling2DLayer(2, 4, 4)
    shape = layer.output_shape()
    assert shape == LayerShape(2, 2, 2)
    assert shape.flat() == layer.forward(_batch()).shape[1]


def test_max_forward_matches_block_maximum():
    x = _batch()
    out = Pooling2DLayer(2, 4, 4).forward(x)
    blocks = x.reshape(2, 2, 2, 2, 2, 2).max(axis=(3, 5)).reshape(2, -1)
    np.testing.assert_array_equal(out, blocks)


def test_average_of_constant_input_is_scaled_constant():
    x = np.full((1, 16), 3.0, dtype=np.float32)
    out = Pooling2DLayer(1, 4, 4, PoolingType.AVERAGE).forward(x)
    np.testing.assert_allclose(out, 3.0)


def test_average_divides_by_full_window_on_clipped_edge():
    x = np.ones((1, 1), dtype=np.float32)
    layer = Pooling2DLayer(1, 1, 1, PoolingType.AVERAGE, pool_size=2, stride=2)
    out = layer.forward(x)
    assert out.shape == (1, 1)
    assert out[0, 0] == pytest.approx(1.0 / layer.pool_size**2)


def test_max_backward_routes_gradient_to_winners():
    x = _batch()
    layer = Pooling2DLayer(2, 4, 4)
    out = layer.forward(x)
    grad = RNG.normal(size=out.shape).astype(np.float32)
    dx = layer.backward(grad)
    assert dx.shape == x.shape
    np.testing.assert_allclose(dx.sum(axis=1), grad.sum(axis=1), rtol=1e-5)
    nonzero = dx != 0
    assert nonzero.sum() == grad.size
    np.testing.assert_array_equal(np.sort(x[nonzero]), np.sort(out.ravel()))


def test_average_backward_spreads_evenly():
    layer = Pooling2DLayer(1, 4, 4, PoolingType.AVERAGE)
    layer.forward(_batch(batch=1, depth=1))
    grad = np.ones((1, 4), dtype=np.float32)
    dx = layer.backward(grad)
    np.testing.assert_allclose(dx, 1.0 / layer.pool_size**2)


def test_overlapping_windows_accumulate_gradients():
    layer = Pooling2DLayer(1, 4, 4, PoolingType.MAX, pool_size=2, stride=1)
    out = layer.forward(_batch(batch=1, depth=1))
    grad = np.ones_like(out)
    dx = layer.backward(grad)
    assert dx.sum() == pytest.approx(grad.sum())


def test_all_negative_infinity_window_drops_gradient():
    x = np.full((1, 4), -np.inf, dtype=np.float32)
    layer = Pooling2DLayer(1, 2, 2)
    out = layer.forward(x)
    assert out[0, 0] == -np.inf
    assert not layer.backward(np.ones_like(out)).any()


def test_max_backward_without_training_pass_raises():
    layer = Pooling2DLayer(1, 4, 4)
    layer.forward(_batch(batch=1, depth=1), is_training=False)
    with pytest.raises(RuntimeError):
        layer.backward(np.ones((1, 4), dtype=np.float32))


def test_wrong_input_width_raises():
    with pytest.raises(ValueError):
        Pooling2DLayer(1, 4, 4).forward(np.zeros((1, 15), dtype=np.float32))


def test_info_text():
    assert Pooling2DLayer(1, 4, 4).info() == "Pooling Layer [MAX] 4x4 -> 2x2"
    assert "[AVG]" in Pooling2DLayer(1, 4, 4, PoolingType.AVERAGE).info()


def test_save_load_round_trip():
    layer = Pooling2DLayer(3, 6, 5, PoolingType.AVERAGE, pool_size=3, stride=1)
    buffer = io.BytesIO()
    layer.save(buffer)
    assert len(buffer.getvalue()) == 24
    buffer.seek(0)
    loaded = Pooling2DLayer.load(buffer)
    assert loaded.info() == layer.info()
    assert loaded.output_shape() == layer.output_shape()
    assert loaded.pool_type is PoolingType.AVERAGE


def test_load_truncated_raises():
    with pytest.raises(ValueError):
        Pooling2DLayer.load(io.BytesIO(b"\x00\x01"))


def test_no_parameters_and_clone_is_independent():
    layer = Pooling2DLayer(1, 4, 4)
    assert layer.parameters() == [] and layer.parameter_gradients() == []
    layer.forward(_batch(batch=1, depth=1))
    twin = layer.clone()
    twin.forward(_batch(batch=3, depth=1))
    assert layer.backward(np.ones((1, 4), dtype=np.float32)).shape == (1, 16)
    assert twin.backward(np.ones((3, 4), dtype=np.float32)).shape == (3, 16)


def test_invalid_stride_raises():
    with pytest.raises(ValueError):
        Pooling2DLayer(1, 4, 4, stride=0)