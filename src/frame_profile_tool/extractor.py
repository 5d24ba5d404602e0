# -*- coding: utf-8 -*-
"""
标量统计区域 (CPU / Memory / Rendering) 提取
"""

import logging
import math
from typing import Any, Callable, Dict, List, Union

from .errors import SourceUnavailableError
from .models import CPUFrameData, MemoryFrameData, RenderingFrameData
from .source import PROFILER_AREAS, ProfilingDataSource

logger = logging.getLogger(__name__)

CounterSet = Union[CPUFrameData, MemoryFrameData, RenderingFrameData]

# 统计项名称 -> 输出字段，名称必须完全一致，不在表中的统计项直接忽略
STATISTIC_FIELD_MAP: Dict[str, Dict[str, str]] = {
    'CPU': {
        'Rendering': 'rendering',
        'Scripts': 'scripts',
        'Physics': 'physics',
        'Animation': 'animation',
        'GarbageCollector': 'garbageCollector',
        'VSync': 'VSync',
        'Global Illumination': 'globalIllumination',
        'UI': 'ui',
        'Others': 'others',
    },
    'Memory': {
        'Total Allocated': 'totalAllocated',
        'Texture Memory': 'textureMemory',
        'Mesh Memory': 'meshMemory',
        'Material Count': 'materialCount',
        'Object Count': 'objectCount',
        'Total GC Allocated': 'totalGCAllocated',
        'Global Illumination': 'globalIllumination',
        'GC Allocated': 'gcAllocated',
    },
    'Rendering': {
        'Batches': 'batches',
        'SetPass Calls': 'setPassCall',
        'Triangles': 'triangles',
        'Vertices': 'vertices',
    },
}

COUNTER_SET_TYPES = {
    'CPU': CPUFrameData,
    'Memory': MemoryFrameData,
    'Rendering': RenderingFrameData,
}

# CPU 保留浮点，Memory / Rendering 向零截断为整数
VALUE_CONVERTERS: Dict[str, Callable[[float], Any]] = {
    'CPU': float,
    'Memory': int,
    'Rendering': int,
}


def extract(source: ProfilingDataSource, area: str, frame: int) -> CounterSet:
    """
    提取单帧某个区域的计数器

    Args:
        source: 性能数据源
        area: 统计区域 (CPU / Memory / Rendering)
        frame: 帧索引，必须位于 [first_frame_index, last_frame_index)

    Returns:
        CounterSet: 对应区域的计数器，缺失的计数器为 0

    Raises:
        OutOfRangeError: 区域或帧索引无效
        SourceUnavailableError: 已映射的统计值不是有限数值
    """
    source.check_area(area)
    source.check_frame(frame)

    field_map = STATISTIC_FIELD_MAP[area]
    convert = VALUE_CONVERTERS[area]
    values = {}

    for property_name in source.get_statistics_names(area):
        field_name = field_map.get(property_name)
        identifier = source.get_statistics_identifier(area, property_name)
        value = source.get_statistics_value(identifier, frame)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"[{area}] 帧 {frame} {property_name}: "
                         f"{source.get_formatted_statistics_value(frame, identifier)}")
        if field_name is None:
            continue
        if not math.isfinite(value):
            raise SourceUnavailableError(f"[{area}] 帧 {frame} 的统计项 {property_name} 不是有限数值: {value}")
        values[field_name] = convert(value)

    return COUNTER_SET_TYPES[area](**values)


def process_cpu_frame_data(source: ProfilingDataSource, frame: int) -> CPUFrameData:
    return extract(source, 'CPU', frame)


def process_memory_frame_data(source: ProfilingDataSource, frame: int) -> MemoryFrameData:
    return extract(source, 'Memory', frame)


def process_rendering_frame_data(source: ProfilingDataSource, frame: int) -> RenderingFrameData:
    return extract(source, 'Rendering', frame)


def describe_statistics(source: ProfilingDataSource) -> List[Dict[str, Any]]:
    """
    列出数据源在每个区域中提供的统计项

    Returns:
        List[Dict[str, Any]]: 每项包含 area, name, identifier, field (未映射时为 None)
    """
    rows = []
    for area in PROFILER_AREAS:
        field_map = STATISTIC_FIELD_MAP[area]
        for name in source.get_statistics_names(area):
            rows.append({
                'area': area,
                'name': name,
                'identifier': source.get_statistics_identifier(area, name),
                'field': field_map.get(name),
            })
    return rows
