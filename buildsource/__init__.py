"""BuildSource Cost Estimator.

This package contains the Python cost estimation core for the
BuildSource construction-materials site.

Architecture:
- Material catalog and historical projects read from JSON files
- Regression estimator trained lazily on historical + synthetic data
- Rule-based breakdown across eight cost categories
- Estimate orchestrator reconciling both into a headline figure
"""

__version__ = "1.0.0"
