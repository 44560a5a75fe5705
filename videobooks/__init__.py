"""
Video Editor Books - Source Package

Local bookkeeping for a freelance video-editing business:
clients, billable projects, payments and spreadsheet reports.

DESIGN PRINCIPLES:
1. Validate before anything touches storage
2. Fail early, fail visibly
3. Derived figures are computed, never stored (except project totals)
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Video Editor Books Team"
