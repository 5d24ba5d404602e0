# -*- coding: utf-8 -*-
"""
调用层级展开

以根节点的所有 "有子节点的后代" (分支节点) 为锚点，输出每个分支节点的直接子节点。
注意: 根节点下没有子节点的顶层条目以及顶层分支节点本身都不会被输出，
这是沿用的展开策略，不做补全。
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging

from .models import HierarchyFrameData, HierarchyItemFrameData
from .source import HierarchyColumns, HierarchyFrameDataView, ProfilingDataSource

logger = logging.getLogger(__name__)


@dataclass
class HierarchyScratch:
    """层级展开时复用的节点 ID 缓冲区，每次调用时被整体覆盖"""
    parent_ids: List[int] = field(default_factory=list)
    children_ids: List[int] = field(default_factory=list)

    def clear(self):
        self.parent_ids.clear()
        self.children_ids.clear()


def _read_item(view: HierarchyFrameDataView, item_id: int) -> HierarchyItemFrameData:
    """读取单个层级条目的全部列"""
    return HierarchyItemFrameData(
        itemName=view.get_item_name(item_id),
        itemPath=view.get_item_path(item_id),
        columnName=view.get_item_column_data(item_id, HierarchyColumns.NAME),
        columnObjectName=view.get_item_column_data(item_id, HierarchyColumns.OBJECT_NAME),
        columnCalls=int(view.get_item_column_data_as_single(item_id, HierarchyColumns.CALLS)),
        columnGcMemory=view.get_item_column_data_as_single(item_id, HierarchyColumns.GC_MEMORY),
        columnSelfTime=view.get_item_column_data_as_single(item_id, HierarchyColumns.SELF_TIME),
        columnSelfPercent=view.get_item_column_data(item_id, HierarchyColumns.SELF_PERCENT),
        columnTotalTime=view.get_item_column_data_as_single(item_id, HierarchyColumns.TOTAL_TIME),
        columnTotalPercent=view.get_item_column_data(item_id, HierarchyColumns.TOTAL_PERCENT),
    )


class HierarchyWalker:
    """调用层级展开器"""

    def __init__(self, source: ProfilingDataSource):
        self.source = source
        self.logger = logger

    def walk(self, frame: int, scratch: Optional[HierarchyScratch] = None) -> HierarchyFrameData:
        """
        展开单帧的调用层级

        Args:
            frame: 帧索引
            scratch: 复用的 ID 缓冲区，未提供时为本次调用新建

        Returns:
            HierarchyFrameData: 帧级摘要 + 按分支节点顺序排列的条目列表

        Raises:
            OutOfRangeError: 帧索引无效
        """
        self.source.check_frame(frame)
        if scratch is None:
            scratch = HierarchyScratch()
        else:
            scratch.clear()

        items: List[HierarchyItemFrameData] = []
        with self.source.get_hierarchy_frame_data_view(frame) as view:
            root_id = view.get_root_item_id()
            view.get_item_descendants_that_have_children(root_id, scratch.parent_ids)
            for parent_id in scratch.parent_ids:
                view.get_item_children(parent_id, scratch.children_ids)
                for child_id in scratch.children_ids:
                    items.append(_read_item(view, child_id))

            summary = HierarchyFrameData(
                frameFps=view.frame_fps,
                frameTimeMs=view.frame_time_ms,
                frameGpuTimeMs=view.frame_gpu_time_ms,
                frameIndex=int(view.frame_index),
                items=tuple(items),
            )

        self.logger.debug(f"帧 {frame}: {len(scratch.parent_ids)} 个分支节点，展开 {len(items)} 个条目")
        return summary


def walk(source: ProfilingDataSource, frame: int,
         scratch: Optional[HierarchyScratch] = None) -> HierarchyFrameData:
    """展开单帧调用层级的便捷函数"""
    return HierarchyWalker(source).walk(frame, scratch)
