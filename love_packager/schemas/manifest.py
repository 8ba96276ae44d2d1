"""Pydantic models describing the package manifest."""

from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FileRecord(BaseModel):
    filename: str = Field(..., description="Virtual path, forward-slash separated and rooted at '/'.")
    crunched: int = Field(default=0, ge=0, le=0, description="Compression flag; packages are never compressed.")
    start: int = Field(..., ge=0, description="Offset of the first byte inside the data blob.")
    end: int = Field(..., ge=0, description="Exclusive end offset inside the data blob.")
    audio: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def size(self) -> int:
        return self.end - self.start

    @model_validator(mode="after")
    def _check_range(self) -> "FileRecord":
        if not self.filename.startswith("/"):
            raise ValueError(f"filename must be rooted at '/': {self.filename!r}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) precedes start ({self.start}) for {self.filename}")
        return self


class PackageManifest(BaseModel):
    package_uuid: UUID = Field(..., description="Fresh identifier used by loaders to detect stale caches.")
    remote_package_size: int = Field(..., ge=0, description="Length of the data blob in bytes.")
    files: List[FileRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_layout(self) -> "PackageManifest":
        cursor = 0
        for record in self.files:
            if record.start != cursor:
                raise ValueError(
                    f"{record.filename} starts at {record.start}, expected {cursor} (ranges must be contiguous)"
                )
            cursor = record.end
        if cursor != self.remote_package_size:
            raise ValueError(
                f"remote_package_size ({self.remote_package_size}) does not match end of last file ({cursor})"
            )
        return self
