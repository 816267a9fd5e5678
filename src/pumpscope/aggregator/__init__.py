"""Upstream aggregation API access and list enrichment.

Sub-modules:
- ``schemas``     - ``RankedToken`` record model
- ``client``      - ``AggregatorClient`` for ``/list`` and ``/detail``
- ``enrichment``  - ``ListEnrichmentService`` (list + scraped descriptions)
"""
