"""Packsmith: build server/client mod-pack bundles from a manifest."""

__version__ = "0.3.0"
