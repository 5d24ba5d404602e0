"""
Frame Profile Tool Package
"""

from .models import (
    CPUFrameData,
    MemoryFrameData,
    RenderingFrameData,
    HierarchyItemFrameData,
    HierarchyFrameData,
    FrameData,
)
from .errors import ProfileExportError, OutOfRangeError, SourceUnavailableError, SerializationError
from .source import ProfilingDataSource, HierarchyFrameDataView, InMemoryProfileSource
from .parser import parse_profile_data
from .extractor import extract, describe_statistics
from .hierarchy import walk, HierarchyWalker, HierarchyScratch
from .serializer import serialize, TableSchema
from .runner import run, write_tables

__all__ = [
    'CPUFrameData',
    'MemoryFrameData',
    'RenderingFrameData',
    'HierarchyItemFrameData',
    'HierarchyFrameData',
    'FrameData',
    'ProfileExportError',
    'OutOfRangeError',
    'SourceUnavailableError',
    'SerializationError',
    'ProfilingDataSource',
    'HierarchyFrameDataView',
    'InMemoryProfileSource',
    'parse_profile_data',
    'extract',
    'describe_statistics',
    'walk',
    'HierarchyWalker',
    'HierarchyScratch',
    'serialize',
    'TableSchema',
    'run',
    'write_tables',
]
