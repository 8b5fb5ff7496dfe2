from __future__ import annotations

from typing import Protocol


class IdentityGate(Protocol):
    """Face verification used to authorize a check-in.

    ``verify`` returns the recognized label, or ``"unknown"`` when no registered
    face is close enough. It raises ``VerificationError`` when no face is found in
    the image, the models are not loaded, or no reference faces exist.
    """

    def verify(self, image: bytes) -> str:
        raise NotImplementedError
