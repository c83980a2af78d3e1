"""
Process-wide plumbing: the asyncpg pool, env settings and log setup.
"""
