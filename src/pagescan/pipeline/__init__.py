"""
Pipeline: configured crop -> enhance -> background removal
"""

from pagescan.config_loader import ScannerConfig
from pagescan.pipeline.scan_pipeline import ScanPipeline, process_scan
from pagescan.pipeline.types import ScanResult

__all__ = ["ScanPipeline", "process_scan", "ScannerConfig", "ScanResult"]
