"""Domain service: Image Intake.

Turns raw uploads into ``UploadedImage`` values the session can hold.
Each file is checked on its own (emptiness, type, size) and then against
the remaining image budget. Files over budget are rejected in upload
order, never silently dropped. Accepted files are encoded as data URIs
so the session keeps no handle to the original upload.

Nothing here touches the session: the caller attaches ``accepted`` in one
step once the whole batch has been processed.
"""

from __future__ import annotations

import base64
import mimetypes
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from customizer.domain.model.pricing import MEGABYTE, CustomizationPolicy
from customizer.domain.model.session import UploadedImage


@dataclass(frozen=True)
class RawImage:
    """An upload as received: filename, declared type and the bytes."""

    filename: str
    data: bytes
    content_type: str | None = None

    @staticmethod
    def from_path(path: str | Path) -> RawImage:
        p = Path(path)
        return RawImage(filename=p.name, data=p.read_bytes())

    @property
    def resolved_type(self) -> str | None:
        if self.content_type:
            return self.content_type.lower()
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed


class RejectionReason:
    EMPTY_FILE = "EMPTY_FILE"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"


@dataclass(frozen=True)
class IntakeRejection:
    filename: str
    reason: str
    message: str


@dataclass(frozen=True)
class IntakeResult:
    accepted: tuple[UploadedImage, ...]
    images: tuple[UploadedImage, ...]
    rejections: tuple[IntakeRejection, ...]

    def count(self, reason: str) -> int:
        return sum(1 for r in self.rejections if r.reason == reason)


class ImageIntakeService:

    def __init__(self, policy: CustomizationPolicy) -> None:
        self._policy = policy

    def ingest(
        self,
        files: Sequence[RawImage],
        current_images: Iterable[UploadedImage] = (),
    ) -> IntakeResult:
        current = tuple(current_images)
        budget = max(self._policy.max_images - len(current), 0)

        accepted: list[UploadedImage] = []
        rejections: list[IntakeRejection] = []

        for raw in files:
            problem = self._check_file(raw)
            if problem is not None:
                rejections.append(problem)
                continue
            if len(accepted) >= budget:
                rejections.append(
                    IntakeRejection(
                        raw.filename,
                        RejectionReason.LIMIT_EXCEEDED,
                        f"Only {self._policy.max_images} images are allowed per order",
                    )
                )
                continue
            accepted.append(self._encode(raw))

        return IntakeResult(
            accepted=tuple(accepted),
            images=current + tuple(accepted),
            rejections=tuple(rejections),
        )

    # --- Internal helpers -----------------------------------------------------

    def _check_file(self, raw: RawImage) -> IntakeRejection | None:
        if not raw.data:
            return IntakeRejection(
                raw.filename, RejectionReason.EMPTY_FILE, f"{raw.filename} is empty"
            )

        content_type = raw.resolved_type
        if content_type not in self._policy.allowed_image_types:
            allowed = ", ".join(
                sorted(t.split("/", 1)[1].upper() for t in self._policy.allowed_image_types)
            )
            return IntakeRejection(
                raw.filename,
                RejectionReason.UNSUPPORTED_TYPE,
                f"{raw.filename} is not a supported image ({allowed})",
            )

        if len(raw.data) > self._policy.max_image_bytes:
            limit_mb = self._policy.max_image_bytes / MEGABYTE
            return IntakeRejection(
                raw.filename,
                RejectionReason.FILE_TOO_LARGE,
                f"{raw.filename} is larger than {limit_mb:g}MB",
            )
        return None

    @staticmethod
    def _encode(raw: RawImage) -> UploadedImage:
        content_type = raw.resolved_type or "application/octet-stream"
        encoded = base64.b64encode(raw.data).decode("ascii")
        return UploadedImage(
            id=uuid.uuid4().hex[:12],
            filename=raw.filename,
            content_type=content_type,
            data_url=f"data:{content_type};base64,{encoded}",
            size=len(raw.data),
        )
