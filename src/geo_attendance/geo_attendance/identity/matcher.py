from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from ..core.constants import DEFAULT_FACE_MATCH_THRESHOLD, UNKNOWN_FACE_LABEL
from ..core.enums import VerificationErrorKind
from ..core.exceptions import VerificationError


@dataclass(frozen=True)
class FaceMatch:
    label: str
    distance: float


class FaceMatcher:
    """Nearest-label matcher over face descriptors.

    A label may carry zero or more reference descriptors; labels without any are
    skipped. The distance to a label is the mean euclidean distance to its
    descriptors, and a match must be strictly below ``threshold``.
    """

    def __init__(self, labeled: Mapping[str, Sequence], *, threshold: float = DEFAULT_FACE_MATCH_THRESHOLD):
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self._threshold = float(threshold)
        self._labeled: dict[str, np.ndarray] = {}
        for label, descriptors in labeled.items():
            if len(descriptors) == 0:
                continue
            self._labeled[label] = np.asarray(descriptors, dtype=np.float64)

    @property
    def labels(self) -> list[str]:
        return list(self._labeled)

    def best_match(self, descriptor) -> FaceMatch:
        if not self._labeled:
            raise VerificationError(VerificationErrorKind.NO_REFERENCE_DATA)

        query = np.asarray(descriptor, dtype=np.float64)
        best = None
        for label, refs in self._labeled.items():
            distance = float(np.linalg.norm(refs - query, axis=1).mean())
            if best is None or distance < best.distance:
                best = FaceMatch(label=label, distance=distance)

        if best.distance < self._threshold:
            return best
        return FaceMatch(label=UNKNOWN_FACE_LABEL, distance=best.distance)
