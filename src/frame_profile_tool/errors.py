# -*- coding: utf-8 -*-
"""
导出流程的异常定义
"""


class ProfileExportError(Exception):
    """帧数据导出相关错误的基类"""


class OutOfRangeError(ProfileExportError, ValueError):
    """帧索引或统计区域 (area) 不在数据源的有效范围内"""


class SourceUnavailableError(ProfileExportError):
    """数据源未加载或无法读取"""


class SerializationError(ProfileExportError):
    """行数据与表结构不匹配"""
