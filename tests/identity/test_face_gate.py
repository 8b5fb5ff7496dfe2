import cv2
import numpy as np
import pytest

from src.geo_attendance.geo_attendance.core.enums import VerificationErrorKind
from src.geo_attendance.geo_attendance.core.exceptions import VerificationError
from src.geo_attendance.geo_attendance.identity.face_gate import FaceRecognitionGate


def _vec(x):
    v = np.zeros(128)
    v[0] = x
    return v


class FakeFaceBackend:
    """Stands in for the face_recognition module.

    Reference files map to encodings by file name; camera frames return ``frame_encodings``.
    """

    def __init__(self, by_name, frame_encodings=()):
        self.by_name = by_name
        self.frame_encodings = list(frame_encodings)

    def load_image_file(self, path):
        return path

    def face_locations(self, image):
        if isinstance(image, str):
            return [(0, 1, 1, 0)] if self._name(image) in self.by_name else []
        return [(0, 1, 1, 0)] * len(self.frame_encodings)

    def face_encodings(self, image, locations):
        if not locations:
            return []
        if isinstance(image, str):
            return [self.by_name[self._name(image)]]
        return self.frame_encodings

    @staticmethod
    def _name(path):
        return path.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]


def _png(color=(40, 80, 120)):
    ok, buf = cv2.imencode(".png", np.full((8, 8, 3), color, dtype=np.uint8))
    assert ok
    return buf.tobytes()


@pytest.fixture
def reference_dir(tmp_path):
    for label, files in {"Pranay": ["1.jpg", "2.png"], "Asha": ["a.jpg", "notes.txt"], "Ghost": ["blurry.jpg"]}.items():
        (tmp_path / label).mkdir()
        for name in files:
            (tmp_path / label / name).write_bytes(b"")
    return tmp_path


def _gate(reference_dir, frame_encodings=()):
    backend = FakeFaceBackend(
        {"1.jpg": _vec(0.0), "2.png": _vec(0.1), "a.jpg": _vec(1.0)},
        frame_encodings=frame_encodings,
    )
    gate = FaceRecognitionGate(reference_dir, threshold=0.6, backend=backend)
    gate.load()
    return gate


def test_verify_before_load_is_model_not_ready(reference_dir):
    gate = FaceRecognitionGate(reference_dir, backend=FakeFaceBackend({}))

    assert not gate.ready
    with pytest.raises(VerificationError) as exc:
        gate.verify(_png())
    assert exc.value.kind == VerificationErrorKind.MODEL_NOT_READY


def test_recognizes_the_closest_label(reference_dir):
    gate = _gate(reference_dir, frame_encodings=[_vec(0.05)])

    assert gate.ready
    assert gate.verify(_png()) == "Pranay"


def test_unknown_face(reference_dir):
    gate = _gate(reference_dir, frame_encodings=[_vec(5.0)])

    assert gate.verify(_png()) == "unknown"


def test_any_recognized_face_in_the_frame_counts(reference_dir):
    gate = _gate(reference_dir, frame_encodings=[_vec(5.0), _vec(0.95)])

    assert gate.verify(_png()) == "Asha"


def test_frame_without_faces(reference_dir):
    gate = _gate(reference_dir)

    with pytest.raises(VerificationError) as exc:
        gate.verify(_png())
    assert exc.value.kind == VerificationErrorKind.NO_FACE_DETECTED


def test_undecodable_image(reference_dir):
    gate = _gate(reference_dir, frame_encodings=[_vec(0.0)])

    with pytest.raises(VerificationError) as exc:
        gate.verify(b"not an image")
    assert exc.value.kind == VerificationErrorKind.NO_FACE_DETECTED


def test_missing_reference_dir_loads_empty(tmp_path):
    gate = FaceRecognitionGate(tmp_path / "missing", backend=FakeFaceBackend({}, frame_encodings=[_vec(0.0)]))
    gate.load()

    with pytest.raises(VerificationError) as exc:
        gate.verify(_png())
    assert exc.value.kind == VerificationErrorKind.NO_REFERENCE_DATA
