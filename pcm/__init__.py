# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Point Cloud Map (``*.pcm``) data model and text codec."""

from pcm.common.specs import LIBRARY_VERSION
from pcm.config import CodecConfig, load_config
from pcm.errors import DecodeIssue, DecodeReport, IssueKind, PCMDecodeError
from pcm.map import PointCloudMap, dumps, loads
from pcm.tables import PointTable, ReferenceTable
from pcm.types import Point3D, Reference, ReferenceId, Vector3f

__version__ = LIBRARY_VERSION

__all__ = [
    "__version__",
    "CodecConfig",
    "DecodeIssue",
    "DecodeReport",
    "IssueKind",
    "PCMDecodeError",
    "Point3D",
    "PointCloudMap",
    "PointTable",
    "Reference",
    "ReferenceId",
    "ReferenceTable",
    "Vector3f",
    "dumps",
    "load_config",
    "loads",
]
