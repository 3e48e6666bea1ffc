"""Configuration models for the verifier."""

from pydantic import BaseModel, Field, ConfigDict
from crccheck.common import CRC32_CHUNK_SIZE, LoggingConfig
from crccheck.common.config_utils import get_cpu_count


class VerifierConfig(BaseModel):
    """Verification performance and traversal configuration."""

    model_config = ConfigDict(extra='forbid')

    concurrency: int = Field(
        default_factory=get_cpu_count,
        ge=1,
        description="Maximum number of files verified at once (default: CPU cores)"
    )
    chunk_size: int = Field(
        default=CRC32_CHUNK_SIZE,
        ge=1,
        description="Bytes read per chunk while computing CRC32"
    )
    queue_maxsize: int | None = Field(
        default=None,
        ge=1,
        description="Paths buffered ahead of the workers (default: concurrency)"
    )
    ordered: bool = Field(
        default=False,
        description="Report results in input order instead of completion order"
    )
    recursive: bool = Field(
        default=True,
        description="Descend into subdirectories of directory inputs"
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Follow symlinked directories during traversal"
    )


class CrcCheckConfig(BaseModel):
    """Root configuration for crccheck."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    verifier: VerifierConfig = Field(default_factory=VerifierConfig)
