"""
Boundary layer.

Adapters for systems outside the process: PostgreSQL (db) and the chunk
vector index (vdb).
"""
