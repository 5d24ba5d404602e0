"""
帧性能数据导出文件 (JSON / JSON.gz) 解析器
"""

import json
import gzip
import math
from pathlib import Path
from typing import Any, Dict, Union
import logging

from .errors import SourceUnavailableError
from .source import (
    FrameSample,
    HierarchyItem,
    HierarchySample,
    InMemoryProfileSource,
)

logger = logging.getLogger(__name__)


def _parse_item(item_data: Dict[str, Any]) -> HierarchyItem:
    """解析层级节点，按栈迭代展开，层级深度不受递归深度限制"""
    root = HierarchyItem(name=str(item_data.get('name', '')), columns=dict(item_data.get('columns', {})))
    stack = [(root, item_data)]
    while stack:
        item, data = stack.pop()
        for child_data in data.get('children', []):
            child = HierarchyItem(name=str(child_data.get('name', '')),
                                  columns=dict(child_data.get('columns', {})))
            item.children.append(child)
            stack.append((child, child_data))
    return root


def _parse_statistic(frame: int, area: str, name: str, value: Any) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise SourceUnavailableError(f"帧 {frame} 的统计项 {area}/{name} 不是有限数值: {value}")
    return value


def _parse_hierarchy(frame: int, hierarchy_data: Dict[str, Any]) -> HierarchySample:
    root_data = hierarchy_data.get('root') or {'name': 'ROOT'}
    return HierarchySample(
        frame_index=int(hierarchy_data.get('frameIndex', frame)),
        frame_fps=float(hierarchy_data.get('frameFps', 0.0)),
        frame_time_ms=float(hierarchy_data.get('frameTimeMs', 0.0)),
        frame_gpu_time_ms=float(hierarchy_data.get('frameGpuTimeMs', 0.0)),
        root=_parse_item(root_data),
    )


def _parse_frame(frame_data: Dict[str, Any]):
    """
    解析单帧数据

    Args:
        frame_data: 帧数据字典

    Returns:
        Tuple[int, FrameSample]: 帧索引与采样数据
    """
    frame = int(frame_data['frame'])
    statistics = {
        area: {name: _parse_statistic(frame, area, name, value) for name, value in values.items()}
        for area, values in frame_data.get('statistics', {}).items()
    }
    hierarchy_data = frame_data.get('hierarchy')
    hierarchy = _parse_hierarchy(frame, hierarchy_data) if hierarchy_data is not None else None
    return frame, FrameSample(statistics=statistics, hierarchy=hierarchy)


def parse_profile_data(file_path: Union[str, Path]) -> InMemoryProfileSource:
    """
    解析帧性能数据导出文件

    Args:
        file_path: JSON 文件路径，以 .gz 结尾时按 gzip 读取

    Returns:
        InMemoryProfileSource: 已加载的数据源

    Raises:
        SourceUnavailableError: 文件不存在或格式错误
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise SourceUnavailableError(f"文件不存在: {file_path}")

    logger.info(f"正在解析文件: {file_path}")

    try:
        open_func = gzip.open if file_path.suffix == '.gz' else open
        with open_func(file_path, 'rt', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, RecursionError) as e:
        raise SourceUnavailableError(f"无法读取文件 {file_path}: {e}") from e

    if not isinstance(data, dict) or 'frames' not in data:
        raise SourceUnavailableError(f"文件 {file_path} 缺少 frames 字段")

    try:
        frames = dict(_parse_frame(frame_data) for frame_data in data['frames'])
        source = InMemoryProfileSource(
            frames,
            first_frame_index=data.get('firstFrameIndex'),
            last_frame_index=data.get('lastFrameIndex'),
            statistics_names=data.get('statistics'),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SourceUnavailableError(f"文件 {file_path} 格式错误: {e}") from e

    logger.info(f"读取到 {len(frames)} 帧数据")
    return source
