"""In-process incremental collections: multisets, arrangements, iterate."""

from addnet_dataflow.collection import Arrangement, Collection
from addnet_dataflow.input import InputSession
from addnet_dataflow.iterate import IterateResult, iterate

__all__ = [
    "Arrangement",
    "Collection",
    "InputSession",
    "IterateResult",
    "iterate",
]
