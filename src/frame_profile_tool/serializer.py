# -*- coding: utf-8 -*-
"""
表格序列化

serialize 是纯函数: 行数据 -> CSV 文本，写文件由调用方负责。
字段值不做引号转义，层级条目名称/路径中出现逗号时会破坏列对齐 (已知限制)。
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from .errors import SerializationError
from .models import FrameData


@dataclass(frozen=True)
class TableSchema:
    """输出表结构: 文件名 + 有序字段列表"""
    name: str
    fields: Tuple[str, ...]

    @property
    def header(self) -> str:
        return ','.join(self.fields)


CPU_SCHEMA = TableSchema('cpu.csv', (
    'frame', 'rendering', 'scripts', 'physics', 'animation', 'garbageCollector',
    'VSync', 'globalIllumination', 'ui', 'others',
))
MEMORY_SCHEMA = TableSchema('memory.csv', (
    'frame', 'totalAllocated', 'textureMemory', 'meshMemory', 'materialCount',
    'objectCount', 'totalGCAllocated', 'globalIllumination', 'gcAllocated',
))
RENDERING_SCHEMA = TableSchema('rendering.csv', (
    'frame', 'batches', 'setPassCall', 'triangles', 'vertices',
))
HIERARCHY_SCHEMA = TableSchema('hierarchy.csv', (
    'frame', 'frameIndex', 'frameFps', 'frameTimeMs', 'frameGpuTimeMs',
))
HIERARCHY_ITEM_SCHEMA = TableSchema('hierarchy_item.csv', (
    'frame', 'frameIndex', 'itemName', 'itemPath', 'columnName', 'columnObjectName',
    'columnCalls', 'columnGcMemory', 'columnSelfTime', 'columnSelfPercent',
    'columnTotalTime', 'columnTotalPercent',
))

TABLE_SCHEMAS = (CPU_SCHEMA, MEMORY_SCHEMA, RENDERING_SCHEMA, HIERARCHY_SCHEMA, HIERARCHY_ITEM_SCHEMA)


def format_value(value: Any) -> str:
    """
    字段值的文本表示

    - str 原样输出
    - int 十进制
    - float 与区域设置无关的最短表示，整数值不带小数部分 (0, 16, 12.5)
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise SerializationError(f"不支持的字段类型: {type(value).__name__}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    raise SerializationError(f"不支持的字段类型: {type(value).__name__}")


def _check_extra_fields(row: Mapping[str, Any], schema: TableSchema, row_number: int) -> None:
    extra = [key for key in row if key not in schema.fields]
    if extra:
        raise SerializationError(f"{schema.name} 第 {row_number} 行包含多余字段: {sorted(extra)}")


def serialize(rows: Sequence[Mapping[str, Any]], schema: TableSchema) -> str:
    """
    将行数据序列化为 CSV 文本

    Args:
        rows: 行数据，每行的键必须与 schema 的字段完全一致
        schema: 表结构

    Returns:
        str: 表头 + 每行一条记录，行尾均为 "\\n"

    Raises:
        SerializationError: 行缺少字段、包含多余字段或字段值类型不支持
    """
    lines = [schema.header]
    for row_number, row in enumerate(rows):
        _check_extra_fields(row, schema, row_number)
        try:
            values = [row[field_name] for field_name in schema.fields]
        except KeyError as e:
            raise SerializationError(
                f"{schema.name} 第 {row_number} 行缺少字段 {e.args[0]}"
            ) from e
        lines.append(','.join(format_value(value) for value in values))
    return '\n'.join(lines) + '\n'


def to_dataframe(rows: Sequence[Mapping[str, Any]], schema: TableSchema) -> pd.DataFrame:
    """按 schema 的列顺序构建 DataFrame"""
    for row_number, row in enumerate(rows):
        _check_extra_fields(row, schema, row_number)
    missing = [f for row in rows for f in schema.fields if f not in row]
    if missing:
        raise SerializationError(f"{schema.name} 缺少字段: {sorted(set(missing))}")
    return pd.DataFrame([{f: row[f] for f in schema.fields} for row in rows],
                        columns=list(schema.fields))


# ---- 行构建 ----

def _counter_row(frame: int, counters: Any, schema: TableSchema) -> Dict[str, Any]:
    row: Dict[str, Any] = {'frame': frame}
    for field_name in schema.fields[1:]:
        row[field_name] = getattr(counters, field_name)
    return row


def cpu_rows(frame_datas: Sequence[FrameData]) -> List[Dict[str, Any]]:
    return [_counter_row(d.frame, d.cpuFrameData, CPU_SCHEMA) for d in frame_datas]


def memory_rows(frame_datas: Sequence[FrameData]) -> List[Dict[str, Any]]:
    return [_counter_row(d.frame, d.memoryFrameData, MEMORY_SCHEMA) for d in frame_datas]


def rendering_rows(frame_datas: Sequence[FrameData]) -> List[Dict[str, Any]]:
    return [_counter_row(d.frame, d.renderingFrameData, RENDERING_SCHEMA) for d in frame_datas]


def hierarchy_rows(frame_datas: Sequence[FrameData]) -> List[Dict[str, Any]]:
    return [_counter_row(d.frame, d.hierarchyFrameData, HIERARCHY_SCHEMA) for d in frame_datas]


def hierarchy_item_rows(frame_datas: Sequence[FrameData]) -> List[Dict[str, Any]]:
    rows = []
    for d in frame_datas:
        summary = d.hierarchyFrameData
        for item in summary.items:
            # frameIndex 来自帧摘要，其余字段来自条目本身
            row: Dict[str, Any] = {'frame': d.frame, 'frameIndex': summary.frameIndex}
            for field_name in HIERARCHY_ITEM_SCHEMA.fields[2:]:
                row[field_name] = getattr(item, field_name)
            rows.append(row)
    return rows
