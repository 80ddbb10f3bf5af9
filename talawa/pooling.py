"""Two-dimensional max and average pooling over flattened images."""

from __future__ import annotations

import copy
import enum
import itertools
import struct
from dataclasses import dataclass
from typing import BinaryIO

import numpy as np

_HEADER = struct.Struct("<6i")


@dataclass(frozen=True)
class LayerShape:
    """Output shape of a layer as depth, height and width."""

    depth: int
    height: int
    width: int

    def flat(self) -> int:
        return self.depth * self.height * self.width


class PoolingType(enum.IntEnum):
    MAX = 0
    AVERAGE = 1


def _output_dim(size: int, pool_size: int, stride: int) -> int:
    # Truncating division, so a window larger than the input still yields one cell.
    return int((size - pool_size) / stride) + 1


class Pooling2DLayer:
    """Pooling over inputs of shape (batch, depth * height * width).

    Outputs are (batch, depth * out_height * out_width), channel-major.
    Windows that run past the edge are clipped; average pooling still
    divides by ``pool_size ** 2``.
    """

    def __init__(
        self,
        depth: int = 0,
        height: int = 0,
        width: int = 0,
        pool_type: PoolingType = PoolingType.MAX,
        pool_size: int = 2,
        stride: int = 2,
    ):
        if pool_size < 1 or stride < 1:
            raise ValueError("Pool size and stride must be at least 1.")
        self.depth = depth
        self.input_height = height
        self.input_width = width
        self.pool_type = PoolingType(pool_type)
        self.pool_size = pool_size
        self.stride = stride
        self.output_height = _output_dim(height, pool_size, stride)
        self.output_width = _output_dim(width, pool_size, stride)
        self._max_indices: np.ndarray | None = None

    def _windows(self):
        for y, x in itertools.product(range(self.output_height), range(self.output_width)):
            sy, sx = y * self.stride, x * self.stride
            ey = min(sy + self.pool_size, self.input_height)
            ex = min(sx + self.pool_size, self.input_width)
            yield y, x, sy, sx, ey, ex

    def forward(self, inputs, is_training: bool = True) -> np.ndarray:
        x = np.asarray(inputs, dtype=np.float32)
        in_cols = self.depth * self.input_height * self.input_width
        if x.ndim != 2 or x.shape[1] != in_cols:
            raise ValueError(f"Expected input of shape (batch, {in_cols}).")
        batch = x.shape[0]
        img = x.reshape(batch, self.depth, self.input_height, self.input_width)
        out = np.zeros(
            (batch, self.depth, self.output_height, self.output_width), dtype=np.float32
        )
        track = is_training and self.pool_type is PoolingType.MAX
        indices = np.full(out.shape, -1, dtype=np.int64) if track else None
        channel_offset = (np.arange(self.depth) * self.input_height * self.input_width)[
            None, :
        ]
        avg_scale = np.float32(1.0 / (self.pool_size * self.pool_size))

        for y, x_pos, sy, sx, ey, ex in self._windows():
            window = img[:, :, sy:ey, sx:ex].reshape(batch, self.depth, -1)
            if self.pool_type is PoolingType.MAX:
                arg = window.argmax(axis=2)
                best = np.take_along_axis(window, arg[..., None], axis=2)[..., 0]
                found = best > -np.inf
                out[:, :, y, x_pos] = np.where(found, best, -np.inf)
                if indices is not None:
                    win_w = ex - sx
                    flat = (
                        channel_offset
                        + (sy + arg // win_w) * self.input_width
                        + sx
                        + arg % win_w
                    )
                    indices[:, :, y, x_pos] = np.where(found, flat, -1)
            else:
                out[:, :, y, x_pos] = window.sum(axis=2) * avg_scale

        if indices is not None:
            self._max_indices = indices.reshape(batch, -1)
        return out.reshape(batch, -1)

    def backward(self, output_gradients) -> np.ndarray:
        grad = np.asarray(output_gradients, dtype=np.float32)
        out_cols = self.depth * self.output_height * self.output_width
        if grad.ndim != 2 or grad.shape[1] != out_cols:
            raise ValueError(f"Expected gradients of shape (batch, {out_cols}).")
        batch = grad.shape[0]
        dx = np.zeros(
            (batch, self.depth * self.input_height * self.input_width), dtype=np.float32
        )

        if self.pool_type is PoolingType.MAX:
            if self._max_indices is None:
                raise RuntimeError("Backward pass requires a training forward pass first.")
            if self._max_indices.shape != grad.shape:
                raise ValueError("Gradient batch does not match the cached forward pass.")
            valid = self._max_indices != -1
            rows = np.broadcast_to(np.arange(batch)[:, None], grad.shape)
            np.add.at(dx, (rows[valid], self._max_indices[valid]), grad[valid])
            return dx

        scale = np.float32(1.0 / (self.pool_size * self.pool_size))
        spread = grad.reshape(batch, self.depth, self.output_height, self.output_width) * scale
        dimg = dx.reshape(batch, self.depth, self.input_height, self.input_width)
        for y, x_pos, sy, sx, ey, ex in self._windows():
            dimg[:, :, sy:ey, sx:ex] += spread[:, :, y, x_pos][:, :, None, None]
        return dx

    def parameters(self) -> list[np.ndarray]:
        return []

    def parameter_gradients(self) -> list[np.ndarray]:
        return []

    def output_shape(self) -> LayerShape:
        return LayerShape(self.depth, self.output_height, self.output_width)

    def info(self) -> str:
        kind = "MAX" if self.pool_type is PoolingType.MAX else "AVG"
        return (
            f"Pooling Layer [{kind}] {self.input_height}x{self.input_width}"
            f" -> {self.output_height}x{self.output_width}"
        )

    def save(self, stream: BinaryIO) -> None:
        stream.write(
            _HEADER.pack(
                self.depth,
                self.input_height,
                self.input_width,
                int(self.pool_type),
                self.pool_size,
                self.stride,
            )
        )

    @staticmethod
    def load(stream: BinaryIO) -> Pooling2DLayer:
        data = stream.read(_HEADER.size)
        if len(data) != _HEADER.size:
            raise ValueError("Truncated pooling layer record.")
        depth, height, width, kind, pool_size, stride = _HEADER.unpack(data)
        return Pooling2DLayer(depth, height, width, PoolingType(kind), pool_size, stride)

    def clone(self) -> Pooling2DLayer:
        return copy.deepcopy(self)