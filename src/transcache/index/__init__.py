"""Durable records and the domain index."""

from transcache.index.base_record_store import BaseRecordStore
from transcache.index.domain_index import DomainIndex

__all__ = ["BaseRecordStore", "DomainIndex"]
