# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import List, Optional, Tuple


VALID_OUTPUT_FORMATS = ('csv', 'xlsx')


def parse_output_formats(format_spec: str) -> List[str]:
    """
    解析输出格式

    Args:
        format_spec: 逗号分隔的格式字符串，例如 "csv" 或 "csv,xlsx"

    Returns:
        List[str]: 输出格式列表

    Raises:
        ValueError: 如果格式不合法
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = [fmt.strip() for fmt in format_spec.split(',')]
    for fmt in formats:
        if not fmt:
            raise ValueError("输出格式不能为空字符串")
        if fmt not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(VALID_OUTPUT_FORMATS)}")

    if len(formats) != len(set(formats)):
        raise ValueError("输出格式不能重复")

    return formats


def validate_frame_range(first: Optional[int], last: Optional[int],
                         valid_first: int, valid_last: int) -> Tuple[int, int]:
    """
    根据命令行参数和数据源的有效区间确定帧区间

    未指定的一端使用有效区间的对应端点。

    Raises:
        ValueError: 区间为空或反向
    """
    first = valid_first if first is None else first
    last = valid_last if last is None else last
    if first > last:
        raise ValueError(f"--first ({first}) 不能大于 --last ({last})")
    return first, last
