"""
Concurrent execution of the rewrite-map pipeline.
"""

from rwmap.execution.sharded import RunSummary, ShardedWriter, ShardStats

__all__ = ["ShardedWriter", "ShardStats", "RunSummary"]
