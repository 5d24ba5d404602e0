"""
CLI主模块
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import AnalysisCommand, StatsCommand


def parse_arguments(argv: Optional[List[str]] = None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="Frame Profile Tool - 将逐帧性能采样导出为 CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 导出全部帧
  frame-profile-tool analyze data.json --output-dir out

  # 只导出 [100, 200) 区间，同时生成 Excel 文件
  frame-profile-tool analyze data.json.gz --first 100 --last 200 --output-format csv,xlsx

  # 打印 CPU / Memory / Rendering 的统计摘要
  frame-profile-tool analyze data.json --print-summary

  # 列出数据中的统计项名称和 ID
  frame-profile-tool stats data.json
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='输出调试日志 (默认: False)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # analyze 命令 - 导出 CSV
    analyze_parser = subparsers.add_parser('analyze', help='分析导出文件并生成 CSV')
    analyze_parser.add_argument('file', help='帧性能数据导出文件 (.json 或 .json.gz)')
    analyze_parser.add_argument('--first', type=int, default=None,
                                help='起始帧索引 (包含，默认: 数据的第一帧)')
    analyze_parser.add_argument('--last', type=int, default=None,
                                help='结束帧索引 (不包含，默认: 数据的最后一帧之后)')
    analyze_parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')
    analyze_parser.add_argument('--output-format', default='csv',
                                help='输出格式，逗号分隔，支持 csv, xlsx (默认: csv)')
    analyze_parser.add_argument('--workbook-name', default='profile.xlsx',
                                help='Excel 输出文件名 (默认: profile.xlsx)')
    analyze_parser.add_argument('--print-summary', action='store_true',
                                help='在stdout中打印各区域的统计摘要 (默认: False)')

    # stats 命令 - 列出统计项
    stats_parser = subparsers.add_parser('stats', help='列出导出文件中的统计项')
    stats_parser.add_argument('file', help='帧性能数据导出文件 (.json 或 .json.gz)')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """主函数"""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if not args.command:
        print("错误: 请指定命令 (analyze, stats)")
        print("使用 --help 查看帮助信息")
        return 1

    if args.command == 'analyze':
        command = AnalysisCommand()
        return command.run(args)
    elif args.command == 'stats':
        command = StatsCommand()
        return command.run(args)
    else:
        print(f"错误: 未知命令: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
