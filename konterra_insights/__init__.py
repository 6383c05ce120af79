"""
Konterra Network Insights

Graph analysis over a personal contact network: structure, clusters,
introductions, risks and a rolled-up health summary.
"""

__version__ = "0.1.0"
