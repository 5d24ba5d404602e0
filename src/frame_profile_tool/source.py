# -*- coding: utf-8 -*-
"""
性能数据源接口与内存实现

核心流程只依赖 ProfilingDataSource / HierarchyFrameDataView 两个抽象接口，
数据的采集与加载由外部完成。InMemoryProfileSource 保存已经导出的采样数据，
供 parser 模块和测试使用。
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import OutOfRangeError, SourceUnavailableError

logger = logging.getLogger(__name__)

PROFILER_AREAS = ('CPU', 'Memory', 'Rendering')


class HierarchyColumns:
    """调用层级视图的列标识"""
    NAME = 'name'
    OBJECT_NAME = 'objectName'
    CALLS = 'calls'
    GC_MEMORY = 'gcMemory'
    SELF_TIME = 'selfTime'
    SELF_PERCENT = 'selfPercent'
    TOTAL_TIME = 'totalTime'
    TOTAL_PERCENT = 'totalPercent'

    NUMERIC = (CALLS, GC_MEMORY, SELF_TIME, TOTAL_TIME)
    PERCENT = {SELF_PERCENT: SELF_TIME, TOTAL_PERCENT: TOTAL_TIME}


class HierarchyFrameDataView(ABC):
    """
    单帧调用层级视图

    视图持有数据源侧的资源，必须在使用后关闭，推荐使用 with 语句。
    输出列表参数 (out) 会被整体覆盖，而不是追加。
    """

    frame_fps: float
    frame_time_ms: float
    frame_gpu_time_ms: float
    frame_index: int

    def __enter__(self) -> 'HierarchyFrameDataView':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    @abstractmethod
    def valid(self) -> bool:
        """视图是否仍然可用"""

    @abstractmethod
    def close(self) -> None:
        """释放视图占用的资源"""

    @abstractmethod
    def get_root_item_id(self) -> int:
        pass

    @abstractmethod
    def get_item_descendants_that_have_children(self, item_id: int, out: List[int]) -> None:
        pass

    @abstractmethod
    def get_item_children(self, item_id: int, out: List[int]) -> None:
        pass

    @abstractmethod
    def get_item_name(self, item_id: int) -> str:
        pass

    @abstractmethod
    def get_item_path(self, item_id: int) -> str:
        pass

    @abstractmethod
    def get_item_column_data(self, item_id: int, column: str) -> str:
        pass

    @abstractmethod
    def get_item_column_data_as_single(self, item_id: int, column: str) -> float:
        pass


class ProfilingDataSource(ABC):
    """已加载的性能采样会话"""

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        pass

    @property
    @abstractmethod
    def first_frame_index(self) -> int:
        pass

    @property
    @abstractmethod
    def last_frame_index(self) -> int:
        """有效帧区间的结束位置 (不包含)"""

    @abstractmethod
    def get_statistics_names(self, area: str) -> List[str]:
        pass

    @abstractmethod
    def get_statistics_identifier(self, area: str, name: str) -> int:
        pass

    @abstractmethod
    def get_statistics_value(self, identifier: int, frame: int) -> float:
        pass

    @abstractmethod
    def get_formatted_statistics_value(self, frame: int, identifier: int) -> str:
        pass

    @abstractmethod
    def get_hierarchy_frame_data_view(self, frame: int) -> HierarchyFrameDataView:
        pass

    def check_frame(self, frame: int) -> None:
        """检查帧索引是否位于 [first_frame_index, last_frame_index) 之内"""
        if not self.is_loaded:
            raise SourceUnavailableError("性能数据尚未加载")
        if not (self.first_frame_index <= frame < self.last_frame_index):
            raise OutOfRangeError(
                f"帧索引 {frame} 超出有效范围 [{self.first_frame_index}, {self.last_frame_index})"
            )

    @staticmethod
    def check_area(area: str) -> None:
        if area not in PROFILER_AREAS:
            raise OutOfRangeError(f"不支持的统计区域: {area}。支持的区域: {', '.join(PROFILER_AREAS)}")


@dataclass
class HierarchyItem:
    """调用层级树节点 (原始数据)"""
    name: str
    columns: Dict[str, object] = field(default_factory=dict)
    children: List['HierarchyItem'] = field(default_factory=list)


@dataclass
class HierarchySample:
    """单帧调用层级原始数据"""
    frame_index: int
    frame_fps: float = 0.0
    frame_time_ms: float = 0.0
    frame_gpu_time_ms: float = 0.0
    root: HierarchyItem = field(default_factory=lambda: HierarchyItem(name="ROOT"))


@dataclass
class FrameSample:
    """单帧原始采样: 各区域的统计值 + 调用层级"""
    statistics: Dict[str, Dict[str, float]] = field(default_factory=dict)
    hierarchy: Optional[HierarchySample] = None


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


class InMemoryHierarchyView(HierarchyFrameDataView):
    """基于 HierarchySample 的调用层级视图，节点 ID 按先序遍历分配，根节点为 0"""

    def __init__(self, sample: HierarchySample):
        self.frame_fps = float(sample.frame_fps)
        self.frame_time_ms = float(sample.frame_time_ms)
        self.frame_gpu_time_ms = float(sample.frame_gpu_time_ms)
        self.frame_index = int(sample.frame_index)

        self._items: List[HierarchyItem] = []
        self._paths: List[str] = []
        self._children: List[List[int]] = []
        self._index_tree(sample.root)
        self._closed = False

    def _index_tree(self, root: HierarchyItem) -> None:
        # 先序遍历分配节点 ID
        stack: List[Tuple[HierarchyItem, int, str]] = [(root, -1, "")]
        while stack:
            item, parent_id, parent_path = stack.pop()
            item_id = len(self._items)
            self._items.append(item)
            self._children.append([])
            if parent_id < 0:
                path = ""
            elif parent_id == 0:
                path = item.name
            else:
                path = f"{parent_path}/{item.name}"
            self._paths.append(path)
            if parent_id >= 0:
                self._children[parent_id].append(item_id)
            for child in reversed(item.children):
                stack.append((child, item_id, path))

    @property
    def valid(self) -> bool:
        return not self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._items = []
        self._paths = []
        self._children = []
        logger.debug(f"关闭第 {self.frame_index} 帧的层级视图")

    def _check_item(self, item_id: int) -> HierarchyItem:
        if self._closed:
            raise SourceUnavailableError("层级视图已关闭")
        if not (0 <= item_id < len(self._items)):
            raise OutOfRangeError(f"无效的层级节点 ID: {item_id}")
        return self._items[item_id]

    def get_root_item_id(self) -> int:
        if self._closed:
            raise SourceUnavailableError("层级视图已关闭")
        return 0

    def get_item_descendants_that_have_children(self, item_id: int, out: List[int]) -> None:
        self._check_item(item_id)
        result = []
        stack = list(reversed(self._children[item_id]))
        while stack:
            current = stack.pop()
            if self._children[current]:
                result.append(current)
                stack.extend(reversed(self._children[current]))
        out[:] = result

    def get_item_children(self, item_id: int, out: List[int]) -> None:
        self._check_item(item_id)
        out[:] = self._children[item_id]

    def get_item_name(self, item_id: int) -> str:
        return self._check_item(item_id).name

    def get_item_path(self, item_id: int) -> str:
        self._check_item(item_id)
        return self._paths[item_id]

    def get_item_column_data(self, item_id: int, column: str) -> str:
        item = self._check_item(item_id)
        if column == HierarchyColumns.NAME:
            return item.name
        if column in HierarchyColumns.PERCENT:
            text = item.columns.get(column)
            if text is not None:
                return str(text)
            return f"{self._percent_of_frame(item, HierarchyColumns.PERCENT[column]):.1f}%"
        if column in HierarchyColumns.NUMERIC:
            return _format_number(self.get_item_column_data_as_single(item_id, column))
        return str(item.columns.get(column, ""))

    def get_item_column_data_as_single(self, item_id: int, column: str) -> float:
        item = self._check_item(item_id)
        if column in HierarchyColumns.PERCENT:
            return self._percent_of_frame(item, HierarchyColumns.PERCENT[column])
        if column in HierarchyColumns.NUMERIC:
            return float(item.columns.get(column, 0.0) or 0.0)
        return 0.0

    def _percent_of_frame(self, item: HierarchyItem, time_column: str) -> float:
        if self.frame_time_ms <= 0:
            return 0.0
        return float(item.columns.get(time_column, 0.0) or 0.0) / self.frame_time_ms * 100.0


class InMemoryProfileSource(ProfilingDataSource):
    """
    内存中的性能采样会话

    Args:
        frames: 帧索引 -> FrameSample
        first_frame_index: 有效区间起点，默认取最小帧索引
        last_frame_index: 有效区间终点 (不包含)，默认取最大帧索引 + 1
        statistics_names: 每个区域的统计项名称列表，默认按出现顺序从帧数据中收集
    """

    def __init__(self, frames: Dict[int, FrameSample],
                 first_frame_index: Optional[int] = None,
                 last_frame_index: Optional[int] = None,
                 statistics_names: Optional[Dict[str, List[str]]] = None):
        self._frames = dict(frames)
        if first_frame_index is None:
            first_frame_index = min(self._frames) if self._frames else 0
        if last_frame_index is None:
            last_frame_index = max(self._frames) + 1 if self._frames else first_frame_index
        if last_frame_index < first_frame_index:
            raise ValueError(f"无效的帧区间: [{first_frame_index}, {last_frame_index})")
        self._first = first_frame_index
        self._last = last_frame_index
        self._loaded = True

        if statistics_names is None:
            statistics_names = self._collect_statistics_names()
        self._statistics_names = {area: list(statistics_names.get(area, [])) for area in PROFILER_AREAS}

        # 统计项 ID 在所有区域间唯一
        self._identifiers: Dict[Tuple[str, str], int] = {}
        self._identifier_keys: List[Tuple[str, str]] = []
        for area in PROFILER_AREAS:
            for name in self._statistics_names[area]:
                self._identifiers[(area, name)] = len(self._identifier_keys)
                self._identifier_keys.append((area, name))

        logger.info(f"加载了 {len(self._frames)} 帧采样数据，有效区间 [{self._first}, {self._last})")

    def _collect_statistics_names(self) -> Dict[str, List[str]]:
        names: Dict[str, List[str]] = {area: [] for area in PROFILER_AREAS}
        for frame in sorted(self._frames):
            for area, values in self._frames[frame].statistics.items():
                if area not in names:
                    logger.warning(f"忽略未知的统计区域: {area}")
                    continue
                for name in values:
                    if name not in names[area]:
                        names[area].append(name)
        return names

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def unload(self) -> None:
        """卸载数据，之后的所有查询都会失败"""
        self._loaded = False
        self._frames = {}

    @property
    def first_frame_index(self) -> int:
        return self._first

    @property
    def last_frame_index(self) -> int:
        return self._last

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise SourceUnavailableError("性能数据尚未加载")

    def get_statistics_names(self, area: str) -> List[str]:
        self._ensure_loaded()
        self.check_area(area)
        return list(self._statistics_names[area])

    def get_statistics_identifier(self, area: str, name: str) -> int:
        self._ensure_loaded()
        self.check_area(area)
        identifier = self._identifiers.get((area, name))
        if identifier is None:
            raise OutOfRangeError(f"区域 {area} 中不存在统计项: {name}")
        return identifier

    def get_statistics_value(self, identifier: int, frame: int) -> float:
        self.check_frame(frame)
        if not (0 <= identifier < len(self._identifier_keys)):
            raise OutOfRangeError(f"无效的统计项 ID: {identifier}")
        area, name = self._identifier_keys[identifier]
        sample = self._frames.get(frame)
        if sample is None:
            return 0.0
        return float(sample.statistics.get(area, {}).get(name, 0.0))

    def get_formatted_statistics_value(self, frame: int, identifier: int) -> str:
        return _format_number(self.get_statistics_value(identifier, frame))

    def get_hierarchy_frame_data_view(self, frame: int) -> HierarchyFrameDataView:
        self.check_frame(frame)
        sample = self._frames.get(frame)
        if sample is None or sample.hierarchy is None:
            # 丢失的帧只有一个空的根节点
            return InMemoryHierarchyView(HierarchySample(frame_index=frame))
        return InMemoryHierarchyView(sample.hierarchy)
