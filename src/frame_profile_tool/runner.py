# -*- coding: utf-8 -*-
"""
导出流程编排
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging

import pandas as pd

from .errors import OutOfRangeError
from .extractor import process_cpu_frame_data, process_memory_frame_data, process_rendering_frame_data
from .hierarchy import HierarchyScratch, HierarchyWalker
from .models import FrameData
from .serializer import (
    CPU_SCHEMA,
    HIERARCHY_ITEM_SCHEMA,
    HIERARCHY_SCHEMA,
    MEMORY_SCHEMA,
    RENDERING_SCHEMA,
    TABLE_SCHEMAS,
    cpu_rows,
    hierarchy_item_rows,
    hierarchy_rows,
    memory_rows,
    rendering_rows,
    serialize,
    to_dataframe,
)
from .source import ProfilingDataSource

logger = logging.getLogger(__name__)

FrameRange = Tuple[int, int]

# 表名 -> 行构建函数，顺序即输出顺序
TABLE_ROW_BUILDERS = (
    (CPU_SCHEMA, cpu_rows),
    (MEMORY_SCHEMA, memory_rows),
    (RENDERING_SCHEMA, rendering_rows),
    (HIERARCHY_SCHEMA, hierarchy_rows),
    (HIERARCHY_ITEM_SCHEMA, hierarchy_item_rows),
)

SUMMARY_TABLES = (
    ('cpu', CPU_SCHEMA, cpu_rows),
    ('memory', MEMORY_SCHEMA, memory_rows),
    ('rendering', RENDERING_SCHEMA, rendering_rows),
)


def resolve_frame_range(source: ProfilingDataSource, frame_range: Optional[FrameRange] = None) -> FrameRange:
    """
    确定要处理的帧区间

    Args:
        source: 数据源
        frame_range: [first, last) 区间，None 表示数据源的完整有效区间

    Raises:
        OutOfRangeError: 区间不在数据源的有效区间之内
    """
    valid_first, valid_last = source.first_frame_index, source.last_frame_index
    if frame_range is None:
        return valid_first, valid_last

    first, last = frame_range
    if first > last or first < valid_first or last > valid_last:
        raise OutOfRangeError(
            f"帧区间 [{first}, {last}) 超出有效范围 [{valid_first}, {valid_last})"
        )
    return first, last


def process_frame_data(source: ProfilingDataSource, frame: int,
                       scratch: Optional[HierarchyScratch] = None) -> FrameData:
    """处理单帧: 层级展开 + 三个标量区域"""
    return FrameData(
        frame=frame,
        hierarchyFrameData=HierarchyWalker(source).walk(frame, scratch),
        cpuFrameData=process_cpu_frame_data(source, frame),
        memoryFrameData=process_memory_frame_data(source, frame),
        renderingFrameData=process_rendering_frame_data(source, frame),
    )


def collect_frames(source: ProfilingDataSource, frame_range: Optional[FrameRange] = None) -> List[FrameData]:
    """
    按帧索引递增顺序处理所有帧，任何一帧失败都会中止整个流程

    Returns:
        List[FrameData]: 每帧一个快照
    """
    first, last = resolve_frame_range(source, frame_range)
    scratch = HierarchyScratch()
    frame_datas = []
    for frame in range(first, last):
        frame_datas.append(process_frame_data(source, frame, scratch))
    logger.info(f"处理完成 {len(frame_datas)} 帧 [{first}, {last})")
    return frame_datas


def build_tables(frame_datas: Sequence[FrameData]) -> Dict[str, str]:
    """将帧快照序列化为五张 CSV 表，键为输出文件名"""
    tables = {}
    for schema, build_rows in TABLE_ROW_BUILDERS:
        rows = build_rows(frame_datas)
        tables[schema.name] = serialize(rows, schema)
        logger.debug(f"{schema.name}: {len(rows)} 行")
    return tables


def run(source: ProfilingDataSource, frame_range: Optional[FrameRange] = None) -> Dict[str, str]:
    """
    导出主流程

    Args:
        source: 已加载的数据源
        frame_range: [first, last) 区间，默认使用数据源的有效区间

    Returns:
        Dict[str, str]: 文件名 (cpu.csv 等) -> CSV 文本
    """
    start_time = time.time()
    tables = build_tables(collect_frames(source, frame_range))
    logger.info(f"导出完成，耗时 {time.time() - start_time:.2f} 秒")
    return tables


def write_tables(tables: Dict[str, str], output_dir: Union[str, Path]) -> List[Path]:
    """
    将表格写入输出目录

    Returns:
        List[Path]: 生成的文件路径列表
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    generated_files = []
    for name, text in tables.items():
        file_path = output_path / name
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        logger.info(f"CSV 文件已生成: {file_path}")
        generated_files.append(file_path)
    return generated_files


def export_workbook(frame_datas: Sequence[FrameData], file_path: Union[str, Path]) -> Path:
    """将五张表写入同一个 Excel 文件，每张表一个 sheet"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
        for schema, build_rows in TABLE_ROW_BUILDERS:
            df = to_dataframe(build_rows(frame_datas), schema)
            sheet_name = schema.name.rsplit('.', 1)[0]
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    logger.info(f"Excel 文件已生成: {file_path}")
    return file_path


def summarize_frames(frame_datas: Sequence[FrameData]) -> Dict[str, pd.DataFrame]:
    """
    汇总三个标量区域的统计信息

    Returns:
        Dict[str, pd.DataFrame]: 区域名 -> 以计数器为行、mean/min/max 为列的表
    """
    summaries = {}
    for name, schema, build_rows in SUMMARY_TABLES:
        df = to_dataframe(build_rows(frame_datas), schema)
        counters = df[list(schema.fields[1:])].astype(float)
        summaries[name] = pd.DataFrame({
            'mean': counters.mean(),
            'min': counters.min(),
            'max': counters.max(),
        })
    return summaries


__all__ = [
    'TABLE_SCHEMAS',
    'resolve_frame_range',
    'process_frame_data',
    'collect_frames',
    'build_tables',
    'run',
    'write_tables',
    'export_workbook',
    'summarize_frames',
]
