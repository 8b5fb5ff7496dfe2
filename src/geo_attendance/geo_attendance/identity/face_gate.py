from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from ..core.constants import DEFAULT_FACE_MATCH_THRESHOLD, UNKNOWN_FACE_LABEL
from ..core.enums import VerificationErrorKind
from ..core.exceptions import VerificationError
from .matcher import FaceMatcher

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png")


def _default_backend():
    # dlib is heavy to import; only load it when a gate is actually used.
    return importlib.import_module("face_recognition")


class FaceRecognitionGate:
    """Identity gate backed by the ``face_recognition`` library.

    Reference faces are read from ``<reference_dir>/<label>/*.jpg``; each file that
    contains a face adds one descriptor to its label.
    """

    def __init__(
        self,
        reference_dir: str | Path,
        *,
        threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
        backend=None,
    ):
        self._reference_dir = Path(reference_dir)
        self._threshold = float(threshold)
        self._backend = backend
        self._matcher: Optional[FaceMatcher] = None

    @property
    def ready(self) -> bool:
        return self._matcher is not None

    def load(self) -> None:
        backend = self._backend or _default_backend()
        self._backend = backend

        labeled: dict[str, list] = {}
        if self._reference_dir.is_dir():
            for label_dir in sorted(p for p in self._reference_dir.iterdir() if p.is_dir()):
                descriptors = []
                for img_path in sorted(label_dir.iterdir()):
                    if img_path.suffix.lower() not in IMAGE_SUFFIXES:
                        continue
                    image = backend.load_image_file(str(img_path))
                    encodings = backend.face_encodings(image, backend.face_locations(image))
                    if encodings:
                        descriptors.append(encodings[0])
                    else:
                        logger.warning("No face found in reference image %s", img_path)
                labeled[label_dir.name] = descriptors
        else:
            logger.warning("Face reference directory %s does not exist", self._reference_dir)

        self._matcher = FaceMatcher(labeled, threshold=self._threshold)
        logger.info("Face gate loaded %d labels from %s", len(self._matcher.labels), self._reference_dir)

    def verify(self, image: bytes) -> str:
        if self._matcher is None:
            raise VerificationError(VerificationErrorKind.MODEL_NOT_READY)

        rgb = _decode_image(image)
        locations = self._backend.face_locations(rgb)
        encodings = self._backend.face_encodings(rgb, locations)
        if not encodings:
            raise VerificationError(VerificationErrorKind.NO_FACE_DETECTED)

        for encoding in encodings:
            match = self._matcher.best_match(encoding)
            logger.debug("Face match %s (distance=%.3f)", match.label, match.distance)
            if match.label != UNKNOWN_FACE_LABEL:
                return match.label
        return UNKNOWN_FACE_LABEL


def _decode_image(data: bytes) -> np.ndarray:
    nparr = np.frombuffer(data or b"", np.uint8)
    img = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED) if nparr.size else None
    if img is None:
        raise VerificationError(VerificationErrorKind.NO_FACE_DETECTED, "The image could not be read.")

    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    elif img.ndim == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    return np.ascontiguousarray(rgb, dtype=np.uint8)
