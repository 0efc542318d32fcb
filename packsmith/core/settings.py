# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# SETTINGS - ENVIRONMENT CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: Runtime knobs that do not belong in a manifest.
#
# Environment Variables:
# - PACKSMITH_FETCH_TIMEOUT: Seconds per HTTP request (default: 60)
# - PACKSMITH_FETCH_RETRIES: Extra attempts on network/5xx errors (default: 0)
# - PACKSMITH_LOADER_META_URL: Base URL of the loader metadata service
# -----------------------------------------------------------------------------

import os

from pydantic import BaseModel, Field

DEFAULT_LOADER_META_URL = "https://meta.fabricmc.net/v2/versions/loader"


class Settings(BaseModel):
    """Validated runtime settings, usually built from the environment."""

    fetch_timeout: float = Field(60.0, gt=0)
    fetch_retries: int = Field(0, ge=0, le=10)
    loader_meta_url: str = Field(DEFAULT_LOADER_META_URL, min_length=1)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from PACKSMITH_* environment variables."""
        return cls(
            fetch_timeout=float(os.getenv("PACKSMITH_FETCH_TIMEOUT", "60")),
            fetch_retries=int(os.getenv("PACKSMITH_FETCH_RETRIES", "0")),
            loader_meta_url=os.getenv("PACKSMITH_LOADER_META_URL", DEFAULT_LOADER_META_URL).rstrip(
                "/"
            ),
        )
