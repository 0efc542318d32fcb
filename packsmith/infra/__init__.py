# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - Fetcher: Blocking HTTP(S) downloader with filename derivation
# -----------------------------------------------------------------------------

from .fetcher import Fetcher, filename_from_url

__all__ = ["Fetcher", "filename_from_url"]
