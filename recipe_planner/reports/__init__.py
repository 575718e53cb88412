"""
Reporting for planning runs.
"""
from .plan_report import PlanReport
from .convergence_chart import ConvergenceChartBuilder, history_frame

__all__ = ['PlanReport', 'ConvergenceChartBuilder', 'history_frame']
