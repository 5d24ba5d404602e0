"""
统计项列表命令模块
"""

import logging

from ..file_utils import validate_profile_file
from ...errors import ProfileExportError
from ...extractor import describe_statistics
from ...parser import parse_profile_data

logger = logging.getLogger(__name__)


class StatsCommand:
    """列出导出文件中每个区域的统计项名称、ID 和对应的输出列"""

    def run(self, args) -> int:
        print(f"=== 统计项列表 ===")
        print(f"文件: {args.file}")
        print()

        try:
            source = parse_profile_data(validate_profile_file(args.file))
            statistics = describe_statistics(source)
        except (ProfileExportError, ValueError) as e:
            logger.debug("读取统计项失败", exc_info=True)
            print(f"错误: {e}")
            return 1

        print(f"有效帧区间: [{source.first_frame_index}, {source.last_frame_index})")
        current_area = None
        for entry in statistics:
            if entry['area'] != current_area:
                current_area = entry['area']
                print(f"\n[{current_area}]")
            field = entry['field'] if entry['field'] is not None else '(未映射)'
            print(f"  {entry['identifier']:>4}  {entry['name']:<32} -> {field}")
        return 0
