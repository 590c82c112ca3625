"""ibadat: normalization and totals for community deed (ibadat) pledges.

This package contains the deed-name canonicalizer and near-duplicate advisor,
the aggregation and intake services built on them, and the HTTP and command
line surfaces that expose both.
"""

__version__ = "0.1.0"
