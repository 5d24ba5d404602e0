"""
CLI命令模块
"""

from .analysis import AnalysisCommand
from .stats import StatsCommand

__all__ = ['AnalysisCommand', 'StatsCommand']
