"""Store settings and configuration schema."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class StoreSettings(BaseModel):
    """Construction-time options for a file-backed cache store."""
    cache_path: Path = Field(..., description="Directory owning all cache entries")
    addressing_delimiter: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Key segment separator; enables hierarchical addressing when set",
    )

    @property
    def hierarchical(self) -> bool:
        """Whether keys are split into nested directories."""
        return self.addressing_delimiter is not None
