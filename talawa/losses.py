"""Loss functions: a scalar value for tracking and a gradient for backprop."""

from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod

import numpy as np

EPSILON = 1e-7
HUBER_DELTA = 1.0


class LossInputType(enum.Enum):
    """What kind of values a loss expects as its prediction."""

    PROBABILITIES = "probabilities"  # 0.0 to 1.0, e.g. from softmax
    LOGITS = "logits"  # raw scores, e.g. from a linear layer
    RAW_VALUES = "raw_values"  # any value, e.g. regression


def _pair(prediction, target) -> tuple[np.ndarray, np.ndarray]:
    pred = np.atleast_2d(np.asarray(prediction, dtype=np.float64))
    targ = np.atleast_2d(np.asarray(target, dtype=np.float64))
    if pred.ndim != 2:
        raise ValueError("Loss expects two-dimensional predictions.")
    if pred.shape != targ.shape:
        raise ValueError(
            f"Prediction shape {pred.shape} does not match target shape {targ.shape}."
        )
    if pred.size == 0:
        raise ValueError("Loss of an empty prediction is undefined.")
    return pred, targ


def _clip(values: np.ndarray) -> np.ndarray:
    return np.clip(values, EPSILON, 1.0 - EPSILON)


def _as_output(values: np.ndarray) -> np.ndarray:
    return values.astype(np.float32)


class Loss(ABC):
    """A loss over a batch: one sample per row."""

    name: str = ""
    input_type: LossInputType = LossInputType.RAW_VALUES

    @abstractmethod
    def calculate(self, prediction, target) -> float:
        """Scalar loss value."""

    @abstractmethod
    def gradient(self, prediction, target) -> np.ndarray:
        """Gradient of the loss with respect to the prediction."""

    def clone(self) -> Loss:
        return copy.deepcopy(self)


class HuberLoss(Loss):
    """Quadratic for small errors, linear beyond ``HUBER_DELTA``."""

    name = "Huber Loss"
    input_type = LossInputType.RAW_VALUES

    def calculate(self, prediction, target) -> float:
        pred, targ = _pair(prediction, target)
        error = np.abs(targ - pred)
        per_element = np.where(
            error <= HUBER_DELTA,
            0.5 * error * error,
            HUBER_DELTA * (error - 0.5 * HUBER_DELTA),
        )
        return float(per_element.sum() / pred.size)

    def gradient(self, prediction, target) -> np.ndarray:
        pred, targ = _pair(prediction, target)
        diff = pred - targ
        scale = 1.0 / pred.size
        clipped = np.where(diff > 0, HUBER_DELTA, -HUBER_DELTA)
        return _as_output(np.where(np.abs(diff) <= HUBER_DELTA, diff, clipped) * scale)


class MeanSquaredError(Loss):
    """Mean of squared differences over every element."""

    name = "Mean Squared Error"
    input_type = LossInputType.RAW_VALUES

    def calculate(self, prediction, target) -> float:
        pred, targ = _pair(prediction, target)
        diff = pred - targ
        return float((diff * diff).sum() / pred.size)

    def gradient(self, prediction, target) -> np.ndarray:
        pred, targ = _pair(prediction, target)
        return _as_output((2.0 / pred.size) * (pred - targ))


class CrossEntropyLoss(Loss):
    """Cross entropy of clipped predictions, averaged over the batch."""

    name = "Cross Entropy Loss"
    input_type = LossInputType.LOGITS

    def calculate(self, prediction, target) -> float:
        pred, targ = _pair(prediction, target)
        return float(-(targ * np.log(_clip(pred))).sum() / pred.shape[0])

    def gradient(self, prediction, target) -> np.ndarray:
        pred, targ = _pair(prediction, target)
        return _as_output(-(targ / _clip(pred)) / pred.shape[0])


class CategoricalCrossEntropyLoss(Loss):
    """Cross entropy for probability outputs, averaged over the batch."""

    name = "Categorical Cross Entropy Loss"
    input_type = LossInputType.PROBABILITIES

    def calculate(self, prediction, target) -> float:
        pred, targ = _pair(prediction, target)
        return float(-(targ * np.log(_clip(pred))).sum() / pred.shape[0])

    def gradient(self, prediction, target) -> np.ndarray:
        pred, targ = _pair(prediction, target)
        return _as_output(-(targ / _clip(pred)) * (1.0 / pred.shape[0]))


class CrossEntropyWithLogitsLoss(Loss):
    """Numerically stable softmax cross entropy taking raw logits."""

    name = "Cross Entropy With Logits Loss"
    input_type = LossInputType.LOGITS

    @staticmethod
    def _shifted(pred: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        shifted = pred - pred.max(axis=1, keepdims=True)
        sum_exp = np.exp(shifted).sum(axis=1, keepdims=True)
        return shifted, sum_exp

    def calculate(self, prediction, target) -> float:
        pred, targ = _pair(prediction, target)
        shifted, sum_exp = self._shifted(pred)
        log_softmax = shifted - np.log(sum_exp)
        contributions = np.where(targ > 0.0, -targ * log_softmax, 0.0)
        return float(contributions.sum() / pred.shape[0])

    def gradient(self, prediction, target) -> np.ndarray:
        pred, targ = _pair(prediction, target)
        shifted, sum_exp = self._shifted(pred)
        softmax = np.exp(shifted) / sum_exp
        return _as_output((softmax - targ) * (1.0 / pred.shape[0]))


class EmptyLoss(Loss):
    """A loss that is always zero."""

    name = "Empty Loss"
    input_type = LossInputType.RAW_VALUES

    def calculate(self, prediction, target) -> float:
        return 0.0

    def gradient(self, prediction, target) -> np.ndarray:
        return np.zeros(np.atleast_2d(np.asarray(prediction)).shape, dtype=np.float32)