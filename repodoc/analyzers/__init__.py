"""Filename-only repository analysis."""

from .heuristic import HeuristicAnalyzer, analyze_repository, describe
from .rules import NO_FLOW_DETECTED

__all__ = ["HeuristicAnalyzer", "NO_FLOW_DETECTED", "analyze_repository", "describe"]
