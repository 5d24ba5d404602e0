"""
文件处理工具模块
"""

import os

PROFILE_SUFFIXES = ('.json', '.json.gz')


def validate_profile_file(file_path: str) -> str:
    """
    检查导出文件路径

    Args:
        file_path: 帧性能数据导出文件路径

    Returns:
        str: 原样返回的文件路径

    Raises:
        ValueError: 文件不存在或不是 JSON / JSON.gz
    """
    if not os.path.exists(file_path):
        raise ValueError(f"文件不存在: {file_path}")

    if not file_path.lower().endswith(PROFILE_SUFFIXES):
        raise ValueError(f"文件不是 JSON 格式: {file_path}")

    return file_path
