"""
分析命令模块
"""

import logging
import time
from pathlib import Path

import pandas as pd

from ..validators import parse_output_formats, validate_frame_range
from ..file_utils import validate_profile_file
from ...errors import ProfileExportError
from ...parser import parse_profile_data
from ...runner import build_tables, collect_frames, export_workbook, summarize_frames, write_tables

logger = logging.getLogger(__name__)


class AnalysisCommand:
    """分析命令处理器"""

    def run(self, args) -> int:
        """解析导出文件并生成 CSV / Excel"""
        print(f"=== 帧性能数据导出 ===")
        print(f"文件: {args.file}")
        print(f"起始帧: {args.first if args.first is not None else '数据起点'}")
        print(f"结束帧: {args.last if args.last is not None else '数据终点'}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print(f"打印统计摘要: {args.print_summary}")
        print()

        try:
            output_formats = parse_output_formats(args.output_format)
        except ValueError as e:
            print(f"错误: 输出格式解析失败 - {e}")
            return 1

        try:
            file_path = validate_profile_file(args.file)
        except ValueError as e:
            print(f"错误: {e}")
            return 1

        start_time = time.time()
        try:
            source = parse_profile_data(file_path)
            first, last = validate_frame_range(
                args.first, args.last, source.first_frame_index, source.last_frame_index
            )
            print(f"帧区间: [{first}, {last})")

            frame_datas = collect_frames(source, (first, last))
            print(f"已处理 {len(frame_datas)} 帧")

            # 所有帧处理并序列化完成之前不写任何文件
            tables = build_tables(frame_datas)
        except (ProfileExportError, ValueError) as e:
            logger.debug("导出失败", exc_info=True)
            print(f"错误: 导出失败 - {e}")
            return 1

        output_dir = Path(args.output_dir)
        generated_files = []
        try:
            if 'csv' in output_formats:
                generated_files.extend(write_tables(tables, output_dir))
            if 'xlsx' in output_formats:
                generated_files.append(export_workbook(frame_datas, output_dir / args.workbook_name))
        except OSError as e:
            logger.debug("写入输出文件失败", exc_info=True)
            print(f"错误: 写入输出文件失败 - {e}")
            if generated_files:
                print("已生成的文件不完整:")
                for file_path in generated_files:
                    print(f"  {file_path}")
            return 1

        print(f"\n生成文件:")
        for file_path in generated_files:
            print(f"  {file_path}")

        if args.print_summary:
            self._print_summary(frame_datas)

        print(f"\n分析完成，总耗时: {time.time() - start_time:.2f} 秒")
        return 0

    def _print_summary(self, frame_datas):
        if not frame_datas:
            print("\n无帧数据，跳过统计摘要")
            return

        with pd.option_context('display.max_rows', None, 'display.width', 120):
            for area, summary in summarize_frames(frame_datas).items():
                print(f"\n=== {area} ===")
                print(summary.to_string(float_format=lambda x: f"{x:.3f}"))
