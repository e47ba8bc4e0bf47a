from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping

from storage.parquet import ParquetWriteOptions
from test_support.document_generator import DEFAULT_LIST_PROBABILITY
from utils.env_utils import env_float, env_int, env_value

ENV_PREFIX = "ESARROW_"


@dataclass(frozen=True)
class EsArrowConfig:
    """Top-level configuration for mapping conversion runs.

    Keep this intentionally small:
      - write policy (named Parquet profile)
      - reconciliation sample size
      - synthetic document generation knobs
    Type-mapping semantics live in mapping_spec, not here.
    """

    write_profile: str = "DEFAULT"
    sample_size: int | None = None  # None: reconcile against every document

    # Document generation
    list_probability: float = DEFAULT_LIST_PROBABILITY
    seed: int | None = None

    def resolved_write_options(self) -> ParquetWriteOptions:
        profile = DEFAULT_WRITE_PROFILES.get(self.write_profile.upper())
        if profile is None:
            raise KeyError(f"Unknown write_profile={self.write_profile!r}")
        return profile


def config_from_env(base: EsArrowConfig | None = None) -> EsArrowConfig:
    """Overlay ``ESARROW_*`` environment variables onto ``base``."""
    config = base or EsArrowConfig()
    profile = env_value(f"{ENV_PREFIX}WRITE_PROFILE")
    return replace(
        config,
        write_profile=profile or config.write_profile,
        sample_size=env_int(f"{ENV_PREFIX}SAMPLE_SIZE", default=config.sample_size),
        list_probability=env_float(
            f"{ENV_PREFIX}LIST_PROBABILITY", default=config.list_probability
        ),
        seed=env_int(f"{ENV_PREFIX}SEED", default=config.seed),
    )


# --------------------------
# Default policy registry
# --------------------------

DEFAULT_WRITE_PROFILES: Mapping[str, ParquetWriteOptions] = {
    # Snappy pages, fast to write and read.
    "DEFAULT": ParquetWriteOptions(compression="snappy"),
    # Smaller files for archival batches.
    "COMPACT": ParquetWriteOptions(compression="zstd"),
    # Uncompressed, useful when inspecting pages by hand.
    "NONE": ParquetWriteOptions(compression=None, use_dictionary=False),
}
