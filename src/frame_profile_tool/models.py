# -*- coding: utf-8 -*-
"""
帧性能采样数据模型定义
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CPUFrameData:
    """CPU 区域计数器 (引擎原始计时单位，未换算为秒)"""
    rendering: float = 0.0
    scripts: float = 0.0
    physics: float = 0.0
    animation: float = 0.0
    garbageCollector: float = 0.0
    VSync: float = 0.0
    globalIllumination: float = 0.0
    ui: float = 0.0
    others: float = 0.0


@dataclass(frozen=True)
class MemoryFrameData:
    """内存区域计数器 (字节数 / 数量)"""
    totalAllocated: int = 0
    textureMemory: int = 0
    meshMemory: int = 0
    materialCount: int = 0
    objectCount: int = 0
    totalGCAllocated: int = 0
    globalIllumination: int = 0
    gcAllocated: int = 0


@dataclass(frozen=True)
class RenderingFrameData:
    """渲染区域计数器"""
    batches: int = 0
    setPassCall: int = 0
    triangles: int = 0
    vertices: int = 0


@dataclass(frozen=True)
class HierarchyItemFrameData:
    """调用层级中的单个条目"""
    itemName: str
    itemPath: str
    columnName: str
    columnObjectName: str
    columnCalls: int
    columnGcMemory: float
    columnSelfTime: float
    columnSelfPercent: str  # 引擎格式化后的文本，例如 "12.3%"
    columnTotalTime: float
    columnTotalPercent: str


@dataclass(frozen=True)
class HierarchyFrameData:
    """单帧调用层级摘要"""
    frameFps: float = 0.0
    frameTimeMs: float = 0.0
    frameGpuTimeMs: float = 0.0
    frameIndex: int = 0  # 数据自身记录的帧号，丢帧时可能与循环索引不同
    items: Tuple[HierarchyItemFrameData, ...] = ()


@dataclass(frozen=True)
class FrameData:
    """单帧快照"""
    frame: int
    cpuFrameData: CPUFrameData
    memoryFrameData: MemoryFrameData
    renderingFrameData: RenderingFrameData
    hierarchyFrameData: HierarchyFrameData
