"""Exports for the deploy pipeline."""

from .deploy import DeployReport, run_deploy

__all__ = ["DeployReport", "run_deploy"]
