"""Ingestion layer.

This package contains the adapters that fetch raw status from a transport
(cloud HTTP, local radio scan) and the parsers that turn those payloads
into canonical snapshots.
"""

__all__: list[str] = []
